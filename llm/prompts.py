"""
Prompt text for the remote inference endpoint.

Every system prompt insists on JSON-only output; the parsers in
llm/parsing.py still assume the model may ignore that.
"""

from typing import Optional

from memory.models import UserContext

DEPENDENCY_SYSTEM_PROMPT = (
    "You are a senior technical advisor who maps skills to their prerequisites. "
    "Respond with a single valid JSON object only. Do not include any text outside the JSON."
)

MISSING_SKILLS_SYSTEM_PROMPT = (
    "You are a senior technical advisor helping developers identify missing prerequisite skills. "
    "You must return valid JSON only. Do not include any explanatory text outside the JSON response. "
    "Focus on truly prerequisite skills (must know before learning the target skill), "
    "not nice-to-have or complementary skills."
)

EVALUATION_SYSTEM_PROMPT = (
    "You are an expert technical evaluator. "
    "Provide scores and feedback in valid JSON format only."
)


def _context_block(ctx: Optional[UserContext]) -> str:
    if ctx is None:
        return ""

    years = ctx.years_of_experience if ctx.years_of_experience else "unknown"
    role = ctx.current_role or "professional"
    lines = [f"Context: User has {years} years of experience as a {role}."]
    if ctx.existing_skills:
        lines.append(f"Existing skills: {', '.join(ctx.existing_skills)}")
    if ctx.industry:
        lines.append(f"Industry: {ctx.industry}")
    return "\n" + "\n".join(lines) + "\n"


def build_dependency_prompt(skill_name: str, ctx: Optional[UserContext] = None) -> str:
    return f"""Analyze the skill "{skill_name}" and provide a structured response.{_context_block(ctx)}
Please respond with a JSON object containing:
{{
  "dependencies": ["prerequisite1", "prerequisite2"],
  "description": "Brief description of why these dependencies are needed",
  "difficulty": 5,
  "estimatedHours": 25,
  "enables": ["skill1", "skill2", "skill3"],
  "category": "category_name"
}}

Guidelines:
- Dependencies: 1-4 prerequisite skills needed before learning this skill
- Difficulty: 1-10 scale (1=basic, 10=expert level)
- EstimatedHours: Realistic learning time for someone with prerequisites
- Enables: 2-5 skills this skill unlocks or makes easier to learn
- Category: business, technical, creative, analytical, management, communication, etc.

Be specific and practical. For non-technical skills, focus on business/professional context."""


def build_missing_skills_prompt(skill_name: str, ctx: Optional[UserContext] = None) -> str:
    ctx = ctx or UserContext()
    years = ctx.years_of_experience if ctx.years_of_experience is not None else "an unknown number of"
    role = ctx.current_role or "professional"
    existing = ", ".join(ctx.existing_skills) if ctx.existing_skills else "none listed"

    return f"""Analyze the skill "{skill_name}" for someone with {years} years of experience in the role of "{role}".

Current skills they have: {existing}

Please identify missing prerequisite skills that would be important for mastering "{skill_name}". Consider:
1. Foundational technologies and concepts
2. Related tools and frameworks
3. System administration knowledge
4. Programming languages or paradigms
5. Infrastructure and deployment concepts

Return a JSON array of missing skills with this format:
[
  {{
    "name": "skill name",
    "reason": "explanation of why this is needed",
    "confidence": "high|medium|low",
    "category": "programming|infrastructure|devops|database|security|networking|other"
  }}
]

Focus on skills that are truly prerequisite (needed before learning the target skill), not complementary skills. Limit to 5 most important missing skills."""


RUBRICS = {
    "goroutines": """
CLARITY (0-25):
- Clear explanation of what goroutines are
- Well-structured explanation with logical flow
- Proper use of technical terminology

COVERAGE (0-25):
- Explains goroutines vs threads
- Covers mutex vs channel usage scenarios
- Mentions Go scheduler and lightweight nature

DEPTH (0-25):
- Provides concrete examples or code snippets
- Explains performance implications
- Discusses common patterns and best practices

MISCONCEPTIONS (0-25):
- Correctly explains concurrency vs parallelism
- Avoids common pitfalls (shared memory issues)
- Accurate technical details""",
    "docker": """
CLARITY (0-25):
- Clear explanation of containerization concepts
- Well-organized explanation structure
- Appropriate technical vocabulary

COVERAGE (0-25):
- Covers key Docker concepts (images, containers, Dockerfile)
- Explains benefits and use cases
- Mentions container orchestration basics

DEPTH (0-25):
- Provides practical examples
- Discusses best practices
- Covers networking and volume concepts

MISCONCEPTIONS (0-25):
- Correctly distinguishes containers from VMs
- Accurate security considerations
- Proper understanding of layered architecture""",
    "default": """
CLARITY (0-25): Clear, well-structured explanation with proper terminology
COVERAGE (0-25): Addresses key concepts and use cases comprehensively
DEPTH (0-25): Provides examples, best practices, and technical details
MISCONCEPTIONS (0-25): Technically accurate with no major errors""",
}


def get_rubric(topic: str) -> str:
    return RUBRICS.get(topic.lower().strip(), RUBRICS["default"])


def build_evaluation_prompt(topic: str, explanation: str, level: str) -> str:
    return f"""Evaluate this {level}-level explanation of "{topic}":

EXPLANATION TO EVALUATE:
"{explanation}"

EVALUATION CRITERIA:
{get_rubric(topic)}

SCORING SCALE: 0-25 points each category (0=poor, 25=excellent)

Return ONLY valid JSON in this exact format:
{{
  "clarity": <score>,
  "coverage": <score>,
  "depth": <score>,
  "misconceptions": <score>,
  "feedback": "<brief constructive feedback>",
  "totalScore": <sum of all scores>
}}"""
