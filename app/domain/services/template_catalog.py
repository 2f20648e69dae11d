"""
EXAM TEMPLATE CATALOG
Load, validate, and expose predefined exam subject lists

RESPONSIBILITIES:
- Load exam_templates.yml
- Validate template integrity
- Expose read-only typed objects

RULES:
✅ Fail fast on invalid config
✅ Only public templates are exposed
"""

import logging
from pathlib import Path
from typing import List, Optional

import yaml

from app.domain.models import ExamTemplate, ExamTemplateItem
from app.domain.services.profile_validator import (
    MAX_LEVEL,
    MAX_WEIGHT,
    MIN_LEVEL,
    MIN_WEIGHT,
)

logger = logging.getLogger(__name__)


class ExamTemplateCatalog:
    """
    Exam Template Catalog
    Single source of truth for exam templates
    """

    def __init__(self, templates_file: Path):
        """Initialize with the templates YAML path"""
        self.templates_file = Path(templates_file)
        self._templates: List[ExamTemplate] = []

    def load(self) -> None:
        """Load and validate exam_templates.yml"""
        if not self.templates_file.exists():
            raise FileNotFoundError(f"Exam template config not found: {self.templates_file}")

        with open(self.templates_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        templates = []
        for raw in data.get("templates", []):
            items = tuple(
                ExamTemplateItem(
                    subject=item["subject"],
                    weight=float(item["weight"]),
                    median_level=int(item["median_level"]),
                )
                for item in raw.get("items", [])
            )
            templates.append(
                ExamTemplate(
                    id=str(raw["id"]),
                    name=raw["name"],
                    category=raw["category"],
                    items=items,
                    is_public=bool(raw.get("is_public", True)),
                )
            )

        self._validate(templates)
        self._templates = templates
        logger.info(f"Loaded {len(templates)} exam templates from {self.templates_file}")

    @staticmethod
    def _validate(templates: List[ExamTemplate]) -> None:
        ids = [t.id for t in templates]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate exam template ids found in configuration")

        for template in templates:
            if not template.items:
                raise ValueError(f"Exam template {template.id} has no subjects")
            for item in template.items:
                if not MIN_WEIGHT <= item.weight <= MAX_WEIGHT:
                    raise ValueError(
                        f"Exam template {template.id}: weight {item.weight} "
                        f"for {item.subject} out of range"
                    )
                if not MIN_LEVEL <= item.median_level <= MAX_LEVEL:
                    raise ValueError(
                        f"Exam template {template.id}: median level {item.median_level} "
                        f"for {item.subject} out of range"
                    )

    def list_public(self) -> List[ExamTemplate]:
        """Public templates ordered by category, then name"""
        return sorted(
            (t for t in self._templates if t.is_public),
            key=lambda t: (t.category, t.name),
        )

    def categories(self) -> List[str]:
        """Distinct categories of public templates"""
        return sorted({t.category for t in self._templates if t.is_public})

    def get(self, template_id: str) -> Optional[ExamTemplate]:
        """Public template by id, None when missing or private"""
        for template in self._templates:
            if template.id == template_id and template.is_public:
                return template
        return None
