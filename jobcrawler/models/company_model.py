from pydantic import BaseModel, Field, field_validator
from typing import List


def dedupe(items: List[str]) -> List[str]:
    """Drop empty and repeated entries, keeping first-seen order."""
    seen = set()
    unique = []
    for item in items or []:
        if item and item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


class TechStack(BaseModel):
    backend: List[str] = Field(default_factory=list)
    frontend: List[str] = Field(default_factory=list)
    infrastructure: List[str] = Field(default_factory=list)
    other: List[str] = Field(default_factory=list)

    @field_validator("backend", "frontend", "infrastructure", "other")
    @classmethod
    def _unique(cls, value: List[str]) -> List[str]:
        return dedupe(value)

    def summary(self) -> List[str]:
        """Backend and frontend technologies, used as the headline stack."""
        return dedupe(self.backend + self.frontend)


class CompanyCharacteristics(BaseModel):
    size: str = ""  # e.g. "~40名"
    culture: List[str] = Field(default_factory=list)
    tech_stack: List[str] = Field(default_factory=list)
    work_style: List[str] = Field(default_factory=list)

    @field_validator("culture", "tech_stack", "work_style")
    @classmethod
    def _unique(cls, value: List[str]) -> List[str]:
        return dedupe(value)


class CompanyProfile(BaseModel):
    name: str = ""
    industry: str = ""
    sub_industry: str = ""
    company_type: str = "Mid-size"  # Startup, Mid-size, Enterprise
    description: str = ""
    technologies: TechStack = Field(default_factory=TechStack)
    characteristics: CompanyCharacteristics = Field(default_factory=CompanyCharacteristics)
    location: str = ""
    website: str = ""
