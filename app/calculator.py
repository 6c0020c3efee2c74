import logging
import math

from config import CalculConfig, TIRET
from models import (
    ColorTag,
    ModuleResult,
    ModuleStatus,
    OverallResult,
    OverallState,
    SemesterReport,
    SubjectNeed,
    SubjectResult,
    Weights,
    parse_number,
)

logger = logging.getLogger(__name__)


def format_note(value):
    return TIRET if value is None else f"{value:.2f}"


def format_ects(value):
    # 30.0 -> "30", 7.5 -> "7.5"
    return f"{value:g}"


def format_hint(value, config):
    """Classe une note requise : acquise, impossible, ou note à viser."""
    if value <= 0:
        return "0.0"
    if value > config.grade_max:
        return "Impossible"
    return f"Need {value:.2f}"


class SubjectCalculator:
    def __init__(self, config=None):
        self.config = config or CalculConfig()

    def clamp_grade(self, value):
        if value is None or math.isnan(value):
            return self.config.grade_min
        return min(self.config.grade_max, max(self.config.grade_min, value))

    def resolve_weights(self, subject):
        """Poids de la matière s'ils sont lisibles tous les deux, sinon 0.4 / 0.6."""
        midterm_weight = parse_number(subject.midterm_weight)
        final_weight = parse_number(subject.final_weight)
        if midterm_weight is None or final_weight is None:
            return Weights(self.config.default_midterm_weight, self.config.default_final_weight)
        return Weights(midterm_weight, final_weight)

    @staticmethod
    def weighted_average(midterm, final, weights):
        return midterm * weights.midterm + final * weights.final

    def required_final_score(self, midterm, weights):
        """Note d'examen nécessaire pour atteindre la note de passage (non bornée)."""
        if weights.final == 0:
            return self.config.impossible_sentinel
        required_contribution = self.config.target_passing_grade - midterm * weights.midterm
        return required_contribution / weights.final

    def update(self, subject):
        weights = self.resolve_weights(subject)

        midterm = parse_number(subject.midterm)
        final = parse_number(subject.final)
        if midterm is not None:
            midterm = self.clamp_grade(midterm)
        if final is not None:
            final = self.clamp_grade(final)

        required = None
        if midterm is not None:
            required = self.required_final_score(midterm, weights)
            required_display = format_hint(required, self.config)
        else:
            required_display = TIRET

        average = None
        if midterm is not None and final is not None:
            average = self.weighted_average(midterm, final, weights)

        return SubjectResult(
            subject_id=subject.subject_id,
            clamped_midterm=midterm,
            clamped_final=final,
            required_final=required,
            required_final_display=required_display,
            weighted_average=average,
            weighted_average_display=format_note(average),
        )


class ModuleAggregator:
    def __init__(self, config=None):
        self.config = config or CalculConfig()

    def aggregate(self, module, subject_results):
        """
        Calcule la MOG du bloc, la note à viser par matière restante et le statut.

        `subject_results` associe subject_id -> SubjectResult. Seules les
        matières actives avec des ECTS comptent ; une option désactivée est
        ignorée dans les totaux comme dans les moyennes.
        """
        cfg = self.config
        total_weighted_grade = 0.0
        counted_ects = 0.0
        completed_ects = 0.0
        incomplete = []

        for subject in module.subjects:
            if not subject.active or subject.ects <= 0:
                continue
            counted_ects += subject.ects

            average = subject_results[subject.subject_id].weighted_average
            if average is not None and not math.isnan(average):
                total_weighted_grade += average * subject.ects
                completed_ects += subject.ects
            else:
                incomplete.append(subject)

        current_mog = total_weighted_grade / completed_ects if completed_ects > 0 else None

        # Chaque matière restante : on suppose que les autres restantes finissent pile à la note de passage
        needs = []
        if counted_ects == 0:
            mog_need_display = TIRET
        elif counted_ects == completed_ects:
            mog_need_display = "All Done"
        else:
            remaining_ects = counted_ects - completed_ects
            for subject in incomplete:
                others = remaining_ects - subject.ects
                known_points = total_weighted_grade + others * cfg.target_passing_grade
                required = (cfg.target_mog * counted_ects - known_points) / subject.ects
                needs.append(SubjectNeed(subject.subject_id, subject.nom, required, format_hint(required, cfg)))
            mog_need_display = " | ".join(f"{n.nom}: {n.display}" for n in needs)

        if counted_ects == 0:
            status = ModuleStatus.NO_ACTIVE_SUBJECTS
        elif completed_ects == counted_ects:
            status = ModuleStatus.VALIDATED if current_mog >= cfg.target_mog else ModuleStatus.NOT_VALIDATED
        else:
            status = ModuleStatus.IN_PROGRESS

        return ModuleResult(
            module_id=module.module_id,
            counted_ects=counted_ects,
            completed_ects=completed_ects,
            total_weighted_grade=total_weighted_grade,
            current_mog=current_mog,
            needs=tuple(needs),
            status=status,
            mog_display=format_note(current_mog),
            mog_need_display=mog_need_display,
        )


class OverallAggregator:
    def __init__(self, config=None):
        self.config = config or CalculConfig()

    def aggregate(self, modules_and_results):
        """Moyenne du semestre pondérée par les ECTS des blocs terminés."""
        total_weighted_mog = 0.0
        total_counted = 0.0
        total_completed = 0.0

        for module, result in modules_and_results:
            # Recompté depuis les matières actives, pas repris du résultat du bloc
            bloc_ects = module.counted_ects
            total_counted += bloc_ects

            if result.status.is_resolved and result.current_mog is not None and bloc_ects > 0:
                total_weighted_mog += result.current_mog * bloc_ects
                total_completed += bloc_ects

        if total_counted == 0:
            return OverallResult(OverallState.EMPTY, None, 0.0, 0.0, TIRET, ColorTag.BLACK)

        if total_completed == total_counted:
            gpa = total_weighted_mog / total_completed
            color = ColorTag.GREEN if gpa >= self.config.target_mog else ColorTag.RED
            return OverallResult(OverallState.COMPLETE, gpa, total_completed, total_counted, f"{gpa:.2f}", color)

        if total_completed > 0:
            gpa = total_weighted_mog / total_completed
            display = f"{gpa:.2f} ({format_ects(total_completed)}/{format_ects(total_counted)} ECTS complete)"
            return OverallResult(OverallState.PARTIAL, gpa, total_completed, total_counted, display, ColorTag.ORANGE)

        return OverallResult(OverallState.EMPTY, None, 0.0, total_counted, TIRET, ColorTag.BLACK)


class Calculator:
    """Enchaîne matière -> bloc -> semestre à partir de l'état courant."""

    def __init__(self, config=None):
        self.config = config or CalculConfig()
        self.subjects = SubjectCalculator(self.config)
        self.modules = ModuleAggregator(self.config)
        self.overall = OverallAggregator(self.config)

    def on_subject_changed(self, semester, subject_id):
        """Recalcule une matière et y réécrit les notes bornées."""
        subject = semester.module_of(subject_id).subject(subject_id)
        result = self.subjects.update(subject)
        subject.midterm = result.clamped_midterm
        subject.final = result.clamped_final
        logger.debug("Matière %s : requis=%s moyenne=%s", subject_id,
                     result.required_final_display, result.weighted_average_display)
        return result

    def on_module_recompute(self, semester, module_id):
        module = semester.module(module_id)
        results = {s.subject_id: self.subjects.update(s) for s in module.subjects}
        result = self.modules.aggregate(module, results)
        logger.debug("Bloc %s : MOG=%s statut=%s", module_id, result.mog_display, result.status_display)
        return result

    def on_semester_recompute(self, semester):
        pairs = [(m, self.on_module_recompute(semester, m.module_id)) for m in semester.modules]
        return self.overall.aggregate(pairs)

    def recompute_all(self, semester):
        """Cascade complète : toutes les matières, puis les blocs, puis le semestre."""
        subject_results = {s.subject_id: self.on_subject_changed(semester, s.subject_id)
                           for s in semester.subjects()}
        module_results = {}
        for module in semester.modules:
            module_results[module.module_id] = self.modules.aggregate(module, subject_results)
        overall = self.overall.aggregate([(m, module_results[m.module_id]) for m in semester.modules])
        return SemesterReport(subjects=subject_results, modules=module_results, overall=overall)
