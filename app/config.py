from dataclasses import dataclass

# Affiché pour toute valeur manquante
TIRET = "—"


@dataclass(frozen=True)
class CalculConfig:
    """Paramètres injectés dans les calculateurs (objectifs, bornes, poids par défaut)."""
    target_passing_grade: float = 10.0
    target_mog: float = 10.0
    default_midterm_weight: float = 0.4
    default_final_weight: float = 0.6
    grade_min: float = 0.0
    grade_max: float = 20.0
    # Renvoyé quand le poids de l'examen final est nul
    impossible_sentinel: float = 21.0

    def __post_init__(self):
        if self.grade_min >= self.grade_max:
            raise ValueError(f"Bornes de notes invalides : [{self.grade_min}, {self.grade_max}]")

    @classmethod
    def from_mapping(cls, values):
        """Construit une config à partir d'un dict, les clés inconnues sont ignorées."""
        champs = cls.__dataclass_fields__.keys()
        return cls(**{k: float(v) for k, v in values.items() if k in champs and v is not None})
