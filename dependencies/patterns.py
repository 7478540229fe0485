"""
Keyword heuristics that synthesize dependency records for common
technology names that are not in the static catalog.

Rules are checked in order and the first hit wins, so specific rules
(react native, aws lambda) must stay ahead of the general ones
(react, aws).
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from dependencies.models import DependencyRecord, SOURCE_PATTERN, contains_term
from memory.models import normalize_skill_name


@dataclass(frozen=True)
class PatternRule:
    keywords: Tuple[str, ...]
    dependencies: Tuple[str, ...]
    description: str
    difficulty: int
    estimated_hours: int
    enables: Tuple[str, ...]
    category: str
    excludes: Tuple[str, ...] = ()
    # Short keywords like "go" or "rest" only count as whole words
    whole_word: bool = False

    def matches(self, normalized: str) -> bool:
        if any(ex in normalized for ex in self.excludes):
            return False
        if self.whole_word:
            return any(contains_term(normalized, kw) for kw in self.keywords)
        return any(kw in normalized for kw in self.keywords)


PATTERN_RULES: Tuple[PatternRule, ...] = (
    # --- Frontend frameworks ---
    PatternRule(
        ("react native",),
        ("React", "JavaScript", "Mobile Development"),
        "React Native extends React for mobile apps",
        7, 50, ("Expo", "Mobile App Development"), "mobile",
    ),
    PatternRule(
        ("react",),
        ("JavaScript", "HTML", "CSS"),
        "React is a JavaScript library for building UIs",
        6, 40, ("Next.js", "React Native", "Redux"), "frontend",
        excludes=("native",),
    ),
    PatternRule(
        ("vue",),
        ("JavaScript", "HTML", "CSS"),
        "Vue.js is a progressive JavaScript framework",
        5, 35, ("Nuxt.js", "Vuex", "Vue Router"), "frontend",
    ),
    PatternRule(
        ("angular",),
        ("TypeScript", "JavaScript", "HTML", "CSS"),
        "Angular is a TypeScript-based web framework",
        7, 45, ("RxJS", "Angular Material", "NgRx"), "frontend",
    ),
    PatternRule(
        ("next.js", "nextjs"),
        ("React", "JavaScript", "Node.js"),
        "Next.js is a React framework with SSR capabilities",
        6, 30, ("Vercel", "Server-Side Rendering"), "frontend",
    ),
    # --- Backend frameworks ---
    PatternRule(
        ("express", "expressjs"),
        ("Node.js", "JavaScript", "HTTP"),
        "Express.js is a Node.js web framework",
        4, 20, ("REST APIs", "Middleware"), "backend",
        whole_word=True,
    ),
    PatternRule(
        ("django",),
        ("Python", "HTTP", "Database Design"),
        "Django is a Python web framework",
        6, 35, ("Django REST Framework", "PostgreSQL"), "backend",
    ),
    PatternRule(
        ("flask",),
        ("Python", "HTTP"),
        "Flask is a lightweight Python web framework",
        4, 20, ("REST APIs", "Jinja2"), "backend",
    ),
    PatternRule(
        ("spring", "spring boot"),
        ("Java", "HTTP", "Database Design"),
        "Spring is a Java application framework",
        7, 40, ("Spring Boot", "Microservices"), "backend",
        whole_word=True,
    ),
    # --- DevOps and infrastructure ---
    PatternRule(
        ("kubernetes", "k8s"),
        ("Docker", "Linux", "YAML", "Containerization"),
        "Kubernetes orchestrates containerized applications",
        8, 60, ("Helm", "Istio", "Container Orchestration"), "devops",
    ),
    PatternRule(
        ("docker",),
        ("Linux", "Containerization"),
        "Docker enables application containerization",
        5, 25, ("Kubernetes", "Docker Compose"), "devops",
    ),
    PatternRule(
        ("terraform",),
        ("Cloud Computing", "Infrastructure as Code"),
        "Terraform manages infrastructure through code",
        7, 40, ("AWS", "Multi-cloud"), "infrastructure",
    ),
    PatternRule(
        ("ansible",),
        ("Linux", "YAML", "Configuration Management"),
        "Ansible automates configuration management",
        6, 30, ("Infrastructure Automation",), "infrastructure",
    ),
    # --- Cloud platforms ---
    PatternRule(
        ("aws lambda",),
        ("AWS", "Serverless", "Cloud Computing"),
        "AWS Lambda serverless computing service",
        6, 25, ("Serverless Architecture",), "cloud",
    ),
    PatternRule(
        ("aws", "amazon web services"),
        ("Cloud Computing",),
        "Amazon Web Services cloud platform",
        6, 50, ("AWS Lambda", "EC2", "S3"), "cloud",
        whole_word=True,
    ),
    PatternRule(
        ("azure",),
        ("Cloud Computing",),
        "Microsoft Azure cloud platform",
        6, 50, ("Azure Functions", "Azure DevOps"), "cloud",
    ),
    PatternRule(
        ("gcp", "google cloud"),
        ("Cloud Computing",),
        "Google Cloud Platform",
        6, 50, ("Google App Engine", "BigQuery"), "cloud",
        whole_word=True,
    ),
    # --- Databases ---
    PatternRule(
        ("postgresql", "postgres"),
        ("SQL", "Database Design"),
        "PostgreSQL is an advanced relational database",
        6, 35, ("Advanced SQL", "Database Administration"), "database",
    ),
    PatternRule(
        ("mongodb", "mongo"),
        ("Database Design", "JSON", "NoSQL"),
        "MongoDB is a document-based NoSQL database",
        5, 30, ("Mongoose", "Aggregation Pipelines"), "database",
    ),
    PatternRule(
        ("redis",),
        ("Database Design", "Caching"),
        "Redis is an in-memory data structure store",
        4, 15, ("Session Management", "Message Queues"), "database",
    ),
    PatternRule(
        ("mysql",),
        ("SQL", "Database Design"),
        "MySQL is a popular relational database",
        5, 30, ("Database Administration", "Replication"), "database",
    ),
    # --- Programming languages ---
    PatternRule(
        ("typescript",),
        ("JavaScript",),
        "TypeScript adds static typing to JavaScript",
        5, 20, ("Angular", "Strict Type Checking"), "programming",
    ),
    PatternRule(
        ("node.js", "nodejs"),
        ("JavaScript",),
        "Node.js runs JavaScript on the server",
        4, 25, ("Express.js", "NPM"), "backend",
    ),
    PatternRule(
        ("python",),
        ("Programming Fundamentals",),
        "Python is a versatile programming language",
        3, 40, ("Django", "Flask", "Data Science"), "programming",
    ),
    PatternRule(
        ("java",),
        ("Programming Fundamentals", "Object-Oriented Programming"),
        "Java is an object-oriented programming language",
        5, 50, ("Spring", "Android Development"), "programming",
        whole_word=True,
    ),
    PatternRule(
        ("go", "golang"),
        ("Programming Fundamentals",),
        "Go is a statically typed programming language",
        5, 35, ("Microservices", "Concurrency"), "programming",
        whole_word=True,
    ),
    # --- Mobile ---
    PatternRule(
        ("ios", "swift", "swiftui"),
        ("Programming Fundamentals", "Mobile Development"),
        "iOS development with Swift",
        6, 60, ("App Store", "UIKit"), "mobile",
        whole_word=True,
    ),
    PatternRule(
        ("android", "kotlin"),
        ("Programming Fundamentals", "Mobile Development"),
        "Android development",
        6, 60, ("Google Play", "Android SDK"), "mobile",
    ),
    PatternRule(
        ("flutter",),
        ("Dart", "Mobile Development"),
        "Flutter cross-platform mobile framework",
        6, 45, ("Cross-platform Development",), "mobile",
    ),
    # --- Testing ---
    PatternRule(
        ("jest",),
        ("JavaScript", "Testing"),
        "Jest is a JavaScript testing framework",
        4, 15, ("Unit Testing", "Test-Driven Development"), "testing",
        whole_word=True,
    ),
    PatternRule(
        ("cypress",),
        ("JavaScript", "Testing", "Web Development"),
        "Cypress is an end-to-end testing framework",
        5, 20, ("E2E Testing", "Test Automation"), "testing",
    ),
    # --- APIs and protocols ---
    PatternRule(
        ("graphql",),
        ("HTTP", "API Design"),
        "GraphQL is a query language for APIs",
        6, 25, ("Apollo", "GraphQL Subscriptions"), "api",
    ),
    PatternRule(
        ("rest", "restful"),
        ("HTTP", "API Design"),
        "REST is an architectural style for APIs",
        4, 20, ("OpenAPI", "Microservices"), "api",
        whole_word=True,
    ),
)


def match(name: str) -> Optional[DependencyRecord]:
    normalized = normalize_skill_name(name)
    if not normalized:
        return None

    for rule in PATTERN_RULES:
        if rule.matches(normalized):
            return DependencyRecord(
                skill_name=name.strip(),
                dependencies=list(rule.dependencies),
                description=rule.description,
                difficulty=rule.difficulty,
                estimated_hours=rule.estimated_hours,
                enables=list(rule.enables),
                category=rule.category,
                source=SOURCE_PATTERN,
            )
    return None
