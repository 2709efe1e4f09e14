"""Deterministic content synthesis for report stages.

Each stage category maps to one fixed paragraph template. The topic is
substituted into every ``{topic}`` placeholder; nothing else varies, so the
same (topic, stage) pair always produces the same text.
"""
from __future__ import annotations

from deepsearch.models.stages import Stage, StageCategory

TEMPLATES: dict[StageCategory, str] = {
    StageCategory.OVERVIEW: (
        "This section provides a comprehensive overview of {topic}. The topic encompasses "
        "various important aspects including fundamental concepts, key principles, and current "
        "applications. Understanding these foundational elements is crucial for gaining a "
        "complete perspective on {topic}."
    ),
    StageCategory.HISTORY: (
        "The historical development of {topic} has been marked by significant milestones and "
        "evolutionary changes. From its early conceptualization to modern implementations, "
        "{topic} has undergone substantial transformation. Key historical events and pioneering "
        "contributions have shaped its current state and continue to influence future developments."
    ),
    StageCategory.CURRENT_TRENDS: (
        "Current trends in {topic} reflect the dynamic nature of this field. Recent developments "
        "show increasing focus on innovation, efficiency, and practical applications. Modern "
        "approaches incorporate advanced methodologies and technologies, demonstrating the "
        "field's continuous evolution and adaptation to contemporary challenges."
    ),
    StageCategory.APPLICATIONS: (
        "The practical applications of {topic} span across multiple domains and industries. "
        "Real-world implementations demonstrate its versatility and impact. From theoretical "
        "frameworks to concrete use cases, {topic} provides valuable solutions to various "
        "challenges, showing measurable benefits and outcomes in different contexts."
    ),
    StageCategory.CHALLENGES: (
        "Like any significant field, {topic} faces several challenges and considerations. These "
        "include technical limitations, resource constraints, and implementation barriers. "
        "Understanding these challenges is essential for developing effective strategies and "
        "solutions. Ongoing research and development efforts aim to address these obstacles "
        "systematically."
    ),
    StageCategory.FUTURE: (
        "The future outlook for {topic} appears promising with numerous opportunities for "
        "advancement. Emerging technologies and innovative approaches suggest potential "
        "breakthroughs. Anticipated developments include enhanced capabilities, broader "
        "applications, and more sophisticated methodologies that could transform the landscape "
        "of {topic}."
    ),
    StageCategory.BEST_PRACTICES: (
        "Best practices in {topic} have been established through extensive research and "
        "practical experience. These guidelines help ensure optimal outcomes and efficient "
        "implementation. Following proven methodologies, maintaining quality standards, and "
        "adhering to industry recommendations are crucial for success in this field."
    ),
    StageCategory.CASE_STUDIES: (
        "Examining real-world case studies of {topic} provides valuable insights into practical "
        "implementation. Successful examples demonstrate effective strategies and approaches. "
        "These cases illustrate both achievements and lessons learned, offering practical "
        "guidance for similar initiatives and highlighting key success factors."
    ),
}


def synthesize(topic: str, stage: Stage) -> str:
    template = TEMPLATES.get(stage.category, TEMPLATES[StageCategory.OVERVIEW])
    return template.replace("{topic}", topic)


def source_for(stage: Stage) -> str:
    return f"Deep Research Analysis - {stage.perspective_label}"
