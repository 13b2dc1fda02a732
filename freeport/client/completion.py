# freeport/client/completion.py
# 個人檔案完成度：每一步都是「有 / 沒有」，百分比四捨五入成整數
from dataclasses import dataclass, field
from typing import List, Tuple

from freeport.client.view_models import EmployerView, FreelancerView

MIN_SKILLS = 3


@dataclass(frozen=True)
class CompletionStep:
    key: str
    label: str
    done: bool


@dataclass(frozen=True)
class Completion:
    steps: Tuple[CompletionStep, ...] = field(default_factory=tuple)

    @property
    def completed(self) -> int:
        return sum(1 for step in self.steps if step.done)

    @property
    def total(self) -> int:
        return len(self.steps)

    @property
    def percentage(self) -> int:
        if not self.steps:
            return 0
        return round(self.completed / self.total * 100)

    @property
    def is_complete(self) -> bool:
        return self.completed == self.total

    def missing(self) -> List[CompletionStep]:
        return [step for step in self.steps if not step.done]


def freelancer_completion(profile: FreelancerView) -> Completion:
    """七個步驟：基本資料、自我介紹、地點、至少 3 項技能、作品集、學歷、可接案時間"""
    return Completion(steps=(
        CompletionStep("basic_info", "Basic Information",
                       bool(profile.first_name or profile.last_name or profile.email)),
        CompletionStep("bio", "Professional Bio", bool(profile.bio)),
        CompletionStep("location", "Location", bool(profile.location)),
        CompletionStep("skills", "Skills", len(profile.skills) >= MIN_SKILLS),
        CompletionStep("portfolio", "Portfolio", len(profile.portfolio_work) > 0),
        CompletionStep("education", "Education", len(profile.education) > 0),
        CompletionStep("availability", "Availability", profile.availability is not None),
    ))


def employer_completion(profile: EmployerView) -> Completion:
    """三個步驟：公司資料、公司介紹、地點 (Address)"""
    return Completion(steps=(
        CompletionStep("basic_info", "Company Information",
                       bool(profile.company_name or profile.contact_person_name or profile.email)),
        CompletionStep("bio", "Company Description", bool(profile.company_description)),
        CompletionStep("location", "Location", bool(profile.address)),
    ))
