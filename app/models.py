"""Modèles de données : matières, blocs, semestre et résultats de calcul."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


def parse_number(raw) -> Optional[float]:
    """Convertit une valeur de formulaire en float, None si absente ou illisible."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".")
        if raw == "":
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(value) else value


class ModuleStatus(Enum):
    NO_ACTIVE_SUBJECTS = "—"
    IN_PROGRESS = "In Progress"
    VALIDATED = "Validé"
    NOT_VALIDATED = "Non Validé"

    @property
    def is_resolved(self):
        return self in (ModuleStatus.VALIDATED, ModuleStatus.NOT_VALIDATED)


class OverallState(Enum):
    EMPTY = "empty"
    PARTIAL = "partial"
    COMPLETE = "complete"


class ColorTag(Enum):
    GREEN = "green"
    RED = "red"
    ORANGE = "orange"
    BLACK = "black"


@dataclass
class Subject:
    """
    Une matière d'un bloc.

    Les poids sont gardés bruts (tels que saisis) : ils ne sont résolus
    qu'au moment du calcul, avec repli sur les poids par défaut.
    `active` vaut False pour une option exclue par son option jumelle.
    """
    subject_id: str
    nom: str
    ects: float
    midterm: Optional[float] = None
    final: Optional[float] = None
    midterm_weight: object = None
    final_weight: object = None
    active: bool = True

    @property
    def has_input(self):
        return self.midterm is not None or self.final is not None

    @property
    def is_complete(self):
        return self.midterm is not None and self.final is not None

    def clear_scores(self):
        self.midterm = None
        self.final = None


@dataclass
class Module:
    module_id: str
    nom: str
    subjects: List[Subject] = field(default_factory=list)
    # Paires d'options mutuellement exclusives (subject_id, subject_id)
    electives: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def counted_ects(self):
        """ECTS des matières actives, options écartées exclues."""
        return sum(s.ects for s in self.subjects if s.active and s.ects > 0)

    def subject(self, subject_id):
        for s in self.subjects:
            if s.subject_id == subject_id:
                return s
        raise KeyError(f"Matière inconnue dans {self.module_id} : {subject_id}")


@dataclass
class Semester:
    nom: str
    modules: List[Module] = field(default_factory=list)

    def module(self, module_id):
        for m in self.modules:
            if m.module_id == module_id:
                return m
        raise KeyError(f"Bloc inconnu : {module_id}")

    def module_of(self, subject_id):
        for m in self.modules:
            if any(s.subject_id == subject_id for s in m.subjects):
                return m
        raise KeyError(f"Matière inconnue : {subject_id}")

    def subjects(self):
        return [s for m in self.modules for s in m.subjects]


# ---------- RÉSULTATS ----------

@dataclass(frozen=True)
class Weights:
    midterm: float
    final: float


@dataclass(frozen=True)
class SubjectResult:
    subject_id: str
    clamped_midterm: Optional[float]
    clamped_final: Optional[float]
    required_final: Optional[float]
    required_final_display: str
    weighted_average: Optional[float]
    weighted_average_display: str


@dataclass(frozen=True)
class SubjectNeed:
    """Moyenne à obtenir dans une matière non terminée pour valider le bloc."""
    subject_id: str
    nom: str
    required_average: float
    display: str


@dataclass(frozen=True)
class ModuleResult:
    module_id: str
    counted_ects: float
    completed_ects: float
    total_weighted_grade: float
    current_mog: Optional[float]
    needs: Tuple[SubjectNeed, ...]
    status: ModuleStatus
    mog_display: str
    mog_need_display: str

    @property
    def status_display(self):
        return self.status.value


@dataclass(frozen=True)
class OverallResult:
    state: OverallState
    gpa: Optional[float]
    completed_ects: float
    total_ects: float
    overall_display: str
    color_tag: ColorTag


@dataclass(frozen=True)
class SemesterReport:
    subjects: dict
    modules: dict
    overall: OverallResult
