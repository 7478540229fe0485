"""
Static data for recommendation heuristics.

Contains the category complement map, the role table, trending skills,
semantic clusters of interchangeable technologies, and the name-pattern
fallbacks used when a learning plan cannot be resolved.
"""

from typing import Dict, List, Tuple

COMPLEMENTARY_SKILLS: Dict[str, List[str]] = {
    "frontend": ["Testing", "Performance Optimization", "Accessibility", "SEO"],
    "backend": ["Database Design", "API Design", "Security", "Monitoring"],
    "devops": ["Security", "Monitoring", "Automation", "Infrastructure as Code"],
    "mobile": ["UX Design", "App Store Optimization", "Performance Testing"],
    "data": ["Statistics", "Machine Learning", "Data Visualization", "Big Data"],
    "cloud": ["Security", "Cost Optimization", "Monitoring", "DevOps"],
    "programming": ["Algorithm Design", "Code Review", "Testing", "Documentation"],
}

# Checked in order; more specific roles first so "backend developer"
# is not swallowed by "developer".
ROLE_SKILLS: List[Tuple[str, List[str]]] = [
    ("frontend developer", ["UX Design", "Performance Optimization", "Browser DevTools"]),
    ("backend developer", ["Database Design", "API Design", "Security", "Scalability"]),
    ("fullstack developer", ["System Design", "DevOps", "Testing", "Performance"]),
    ("devops engineer", ["Infrastructure as Code", "Monitoring", "Security", "Automation"]),
    ("data scientist", ["Statistics", "Machine Learning", "Data Visualization", "Python"]),
    ("product manager", ["User Research", "Data Analysis", "Project Management", "Communication"]),
    ("designer", ["User Research", "Prototyping", "Design Systems", "Accessibility"]),
    ("developer", ["Code Review", "Testing", "Version Control", "Debugging"]),
]

TRENDING_SKILLS: List[str] = [
    "AI/Machine Learning",
    "Cloud Computing",
    "Cybersecurity",
    "DevOps",
    "Data Analysis",
    "Agile Methodology",
    "Microservices",
    "Containerization",
]

# (match terms, alternatives, category). Terms are matched as whole words
# against the user's skill name; the first cluster that matches wins.
SKILL_CLUSTERS: List[Tuple[Tuple[str, ...], List[str], str]] = [
    # Mobile first, "react native" must not fall into the react cluster
    (("react native",), ["Flutter", "Ionic", "Xamarin", "Cordova"], "mobile"),
    (("flutter",), ["React Native", "Ionic", "NativeScript", "Xamarin"], "mobile"),
    (("ios",), ["Android", "Flutter", "React Native", "Xamarin"], "mobile"),
    (("android",), ["iOS", "Flutter", "React Native", "Ionic"], "mobile"),
    # Frontend
    (("react", "reactjs"), ["Vue.js", "Angular", "Svelte", "Solid.js"], "frontend"),
    (("vue", "vue.js", "vuejs"), ["React", "Angular", "Svelte", "Alpine.js"], "frontend"),
    (("angular",), ["React", "Vue.js", "TypeScript", "RxJS"], "frontend"),
    # Backend
    (("node.js", "nodejs", "node"), ["Deno", "Bun", "Express.js", "Fastify"], "backend"),
    (("express", "express.js"), ["Fastify", "Koa.js", "Hapi.js", "NestJS"], "backend"),
    (("django",), ["Flask", "FastAPI", "Ruby on Rails", "Laravel"], "backend"),
    (("flask",), ["Django", "FastAPI", "Express.js", "Sinatra"], "backend"),
    # Databases
    (("postgresql", "postgres"), ["MySQL", "SQLite", "MariaDB", "CockroachDB"], "database"),
    (("mysql",), ["PostgreSQL", "MariaDB", "SQLite", "Microsoft SQL Server"], "database"),
    (("mongodb", "mongo"), ["DynamoDB", "CouchDB", "Cassandra", "Firebase Firestore"], "database"),
    (("redis",), ["Memcached", "Amazon ElastiCache", "Hazelcast", "Apache Ignite"], "database"),
    # Cloud
    (("aws",), ["Azure", "Google Cloud Platform", "DigitalOcean", "Heroku"], "cloud"),
    (("azure",), ["AWS", "Google Cloud Platform", "IBM Cloud", "Oracle Cloud"], "cloud"),
    (("gcp", "google cloud"), ["AWS", "Azure", "DigitalOcean", "Linode"], "cloud"),
    # DevOps
    (("docker",), ["Podman", "LXC", "Containerd", "rkt"], "devops"),
    (("kubernetes", "k8s"), ["Docker Swarm", "Nomad", "OpenShift", "Rancher"], "devops"),
    (("jenkins",), ["GitLab CI", "GitHub Actions", "CircleCI", "Travis CI"], "devops"),
    (("terraform",), ["Ansible", "Pulumi", "CloudFormation", "Chef"], "devops"),
    # Languages
    (("javascript",), ["TypeScript", "Python", "Java", "C#"], "programming"),
    (("python",), ["JavaScript", "Java", "Go", "Ruby"], "programming"),
    (("java",), ["C#", "Kotlin", "Scala", "Python"], "programming"),
    (("go", "golang"), ["Rust", "Python", "C++", "Java"], "programming"),
    (("rust",), ["Go", "C++", "Zig", "Carbon"], "programming"),
    # Testing
    (("jest",), ["Mocha", "Jasmine", "Vitest", "Cypress"], "testing"),
    (("cypress",), ["Playwright", "Selenium", "Puppeteer", "TestCafe"], "testing"),
    (("mocha",), ["Jest", "Jasmine", "AVA", "Tape"], "testing"),
]

# Broader patterns used when no cluster matches: (term, [(name, reason, difficulty, hours, category)])
BROAD_SIMILARITY: List[Tuple[Tuple[str, ...], List[Tuple[str, str, int, int, str]]]] = [
    (("framework", "library"), [
        ("Software Architecture", "frameworks require architectural knowledge", 6, 30, "architecture"),
        ("Design Patterns", "common in framework development", 5, 25, "programming"),
    ]),
    (("database", "sql"), [
        ("Database Design", "fundamental for database technologies", 5, 25, "database"),
        ("Data Modeling", "essential for database work", 4, 20, "database"),
    ]),
]

SIMILAR_SKILL_DIFFICULTY: Dict[str, int] = {
    "Vue.js": 5, "Angular": 7, "Svelte": 4, "Solid.js": 5,
    "Deno": 4, "Bun": 3, "Express.js": 4, "Fastify": 4,
    "Flask": 4, "FastAPI": 5, "Ruby on Rails": 6, "Laravel": 5,
}

SIMILAR_SKILL_HOURS: Dict[str, int] = {
    "Vue.js": 30, "Angular": 40, "Svelte": 25, "Solid.js": 25,
    "Deno": 20, "Bun": 15, "Express.js": 20, "Fastify": 20,
    "Flask": 20, "FastAPI": 25, "Ruby on Rails": 35, "Laravel": 30,
}

FOUNDATIONAL_SKILLS: List[str] = ["Problem Solving", "Critical Thinking", "Communication"]

# Name-pattern next steps for the fallback learning plan: (terms, [(name, type, reason)]).
# "{skill}" in a reason is replaced with the target skill name.
FALLBACK_NEXT_STEPS: List[Tuple[Tuple[str, ...], List[Tuple[str, str, str]]]] = [
    (("programming", "coding"), [
        ("Software Engineering", "next_step", "Apply {skill} in larger projects"),
        ("Version Control", "next_step", "Essential for any programming work"),
        ("Testing", "next_step", "Quality assurance for code"),
    ]),
    (("management", "leadership"), [
        ("Team Building", "next_step", "Enhance {skill} with team dynamics"),
        ("Strategic Planning", "next_step", "Long-term thinking and planning"),
        ("Communication", "next_step", "Essential for effective leadership"),
    ]),
    (("design", "ui", "ux"), [
        ("User Research", "next_step", "Understand user needs for better design"),
        ("Prototyping", "next_step", "Rapid iteration and testing"),
        ("Design Systems", "next_step", "Scalable and consistent design"),
    ]),
    (("data", "analytics"), [
        ("Statistics", "next_step", "Mathematical foundation for data work"),
        ("Visualization", "next_step", "Present data insights effectively"),
        ("Machine Learning", "advanced", "Advanced data analysis techniques"),
    ]),
]

GENERIC_NEXT_STEPS: List[Tuple[str, str, str]] = [
    ("Project Management", "next_step", "Organize and execute {skill} projects"),
    ("Documentation", "next_step", "Share knowledge and best practices"),
    ("Continuous Learning", "next_step", "Stay current with {skill} trends"),
]

# Keywords that make a skill worth a remote prerequisite analysis.
COMPLEX_SKILL_KEYWORDS: List[str] = [
    "kubernetes", "docker", "aws", "azure", "gcp", "terraform", "ansible",
    "microservices", "devops", "ci/cd", "machine learning", "ai", "blockchain",
    "react", "vue", "angular", "next.js", "django", "spring", "express",
    "postgresql", "mongodb", "redis", "elasticsearch", "kafka", "rabbitmq",
]

# Keyword buckets for categorizing prerequisite names found by the rules.
PREREQUISITE_CATEGORIES: List[Tuple[str, List[str]]] = [
    ("programming", ["javascript", "python", "java", "go", "rust", "typescript", "c++", "c#"]),
    ("infrastructure", ["linux", "networking", "virtualization", "cloud", "vm"]),
    ("devops", ["docker", "kubernetes", "ci/cd", "ansible", "terraform", "jenkins"]),
    ("database", ["sql", "postgresql", "mongodb", "redis", "database"]),
    ("security", ["oauth", "jwt", "authentication", "encryption", "security"]),
    ("networking", ["http", "https", "tcp", "networking", "dns", "load balancing"]),
]
