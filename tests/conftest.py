from pathlib import Path

import pytest

from calculator import Calculator
from config import CalculConfig
from models import Module, Semester, Subject

RACINE = Path(__file__).resolve().parent.parent


def matiere(sid, ects, midterm=None, final=None, poids=(None, None), active=True):
    return Subject(subject_id=sid, nom=sid.capitalize(), ects=ects, midterm=midterm, final=final,
                   midterm_weight=poids[0], final_weight=poids[1], active=active)


def bloc(module_id, *subjects, electives=()):
    return Module(module_id=module_id, nom=module_id, subjects=list(subjects), electives=list(electives))


@pytest.fixture
def config():
    return CalculConfig()


@pytest.fixture
def calculator(config):
    return Calculator(config)


@pytest.fixture
def semestre_partiel():
    """Un bloc validé de 30 ECTS, un bloc de 20 ECTS en cours."""
    return Semester(nom="S1", modules=[
        bloc("bloc-1", matiere("maths", 30, 12, 12)),
        bloc("bloc-2", matiere("info", 10, 14, 11), matiere("physique", 10, 9, None)),
    ])


@pytest.fixture
def racine():
    return RACINE
