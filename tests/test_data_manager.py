import pytest

from calculator import Calculator
from data_manager import DataManager
from models import ColorTag, OverallState, Semester

from conftest import bloc, matiere


def _dataset():
    matieres = [
        {"id": "spanish", "nom": "Espagnol", "ects": 1, "notes": (None, None)},
        {"id": "german", "nom": "Allemand", "ects": 1, "notes": (None, None)},
    ]
    return {"nom": "S1", "blocs": [
        {"id": "bloc-1", "nom": "Bloc 1", "matieres": [
            {"id": "maths", "nom": "Maths", "ects": "6", "notes": ("12,5", None), "poids": (0.5, 0.5)},
            {"id": "info", "ects": 4, "notes": {"midterm": 11, "final": 13}},
        ]},
        {"id": "bloc-4", "nom": "Bloc 4", "matieres": matieres, "options": [("spanish", "german")]},
    ]}


class TestNormaliserDonnees:
    def test_structure(self):
        semestre = DataManager.normaliser_donnees(_dataset())
        assert semestre.nom == "S1"
        assert [m.module_id for m in semestre.modules] == ["bloc-1", "bloc-4"]
        maths = semestre.module("bloc-1").subject("maths")
        assert maths.ects == 6.0
        assert maths.midterm == 12.5
        assert maths.final is None
        assert (maths.midterm_weight, maths.final_weight) == (0.5, 0.5)

    def test_dict_notes_and_default_name(self):
        info = DataManager.normaliser_donnees(_dataset()).module("bloc-1").subject("info")
        assert info.nom == "info"
        assert (info.midterm, info.final) == (11, 13)
        assert info.midterm_weight is None

    def test_electives(self):
        module = DataManager.normaliser_donnees(_dataset()).module("bloc-4")
        assert module.electives == [("spanish", "german")]

    def test_default_ids(self):
        semestre = DataManager.normaliser_donnees({"blocs": [{"matieres": []}]}, nom="S2")
        assert semestre.nom == "S2"
        assert semestre.modules[0].module_id == "bloc-1"
        assert semestre.modules[0].nom == "Bloc 1"

    @pytest.mark.parametrize("matieres, message", [
        ([{"nom": "Sans id", "ects": 3}], "sans identifiant"),
        ([{"id": "a", "ects": 3}, {"id": "a", "ects": 2}], "en double"),
        ([{"id": "a", "ects": -1}], "ECTS invalides"),
        ([{"id": "a", "ects": "trois"}], "ECTS invalides"),
        ([{"id": "a", "ects": 3, "notes": "12/15"}], "illisible"),
    ])
    def test_invalid(self, matieres, message):
        with pytest.raises(ValueError, match=message):
            DataManager.normaliser_donnees({"blocs": [{"matieres": matieres}]})

    def test_unknown_elective(self):
        with pytest.raises(ValueError, match="Option inconnue"):
            DataManager.normaliser_donnees({"blocs": [{"matieres": [{"id": "a", "ects": 1}],
                                                       "options": [("a", "latin")]}]})


class TestExclusivite:
    def test_first_filled_disables_other(self):
        module = bloc("b", matiere("spanish", 2, 12), matiere("german", 2), electives=[("spanish", "german")])
        DataManager.appliquer_exclusivite(module)
        assert module.subject("spanish").active
        assert not module.subject("german").active
        assert module.counted_ects == 2

    def test_second_filled_disables_first(self):
        module = bloc("b", matiere("spanish", 2), matiere("german", 2, None, 9), electives=[("spanish", "german")])
        DataManager.appliquer_exclusivite(module)
        assert not module.subject("spanish").active
        assert module.subject("german").active

    def test_disabled_subject_counts_zero_ects(self):
        module = bloc("b", matiere("spanish", 2, 12, 14), matiere("german", 3),
                      electives=[("spanish", "german")])
        DataManager.appliquer_exclusivite(module)
        german = module.subject("german")
        assert (german.midterm, german.final) == (None, None)
        semestre = Semester("S", [module])
        res = Calculator().on_module_recompute(semestre, "b")
        assert res.counted_ects == 2
        assert res.status_display == "Validé"

    def test_neither_filled_enables_both(self):
        module = bloc("b", matiere("spanish", 2, active=False), matiere("german", 2),
                      electives=[("spanish", "german")])
        DataManager.appliquer_exclusivite(module)
        assert module.subject("spanish").active
        assert module.subject("german").active
        assert module.counted_ects == 4

    def test_both_filled_unchanged(self):
        module = bloc("b", matiere("spanish", 2, 12), matiere("german", 2, 14), electives=[("spanish", "german")])
        DataManager.appliquer_exclusivite(module)
        assert module.subject("spanish").active
        assert module.subject("german").active

    def test_loading_applies_rule(self):
        data = _dataset()
        data["blocs"][1]["matieres"][0]["notes"] = (15, None)
        module = DataManager.normaliser_donnees(data).module("bloc-4")
        assert not module.subject("german").active
        assert module.counted_ects == 1


class TestScanner:
    def test_finds_datasets(self, tmp_path):
        (tmp_path / "semestre_data_test.py").write_text(
            "semestre_data_a = {'blocs': []}\nsemestre_data_b = {'blocs': []}\nautre = 1\n", encoding="utf-8")
        (tmp_path / "semestre_data_vide.py").write_text("x = 1\n", encoding="utf-8")
        (tmp_path / "notes.py").write_text("semestre_data_c = {}\n", encoding="utf-8")
        datasets = DataManager.scanner_fichiers_locaux(str(tmp_path))
        assert list(datasets) == ["semestre_data_test.py"]
        assert set(datasets["semestre_data_test.py"]) == {"semestre_data_a", "semestre_data_b"}

    def test_skips_broken_file(self, tmp_path, caplog):
        (tmp_path / "semestre_data_casse.py").write_text("semestre_data_a = {\n", encoding="utf-8")
        with caplog.at_level("WARNING"):
            assert DataManager.scanner_fichiers_locaux(str(tmp_path)) == {}
        assert "semestre_data_casse.py" in caplog.text

    def test_bundled_datasets(self, racine):
        datasets = DataManager.scanner_fichiers_locaux(str(racine))
        assert "semestre_data_s5.py" in datasets
        for data in datasets["semestre_data_s5.py"].values():
            semestre = DataManager.normaliser_donnees(data)
            assert len(semestre.modules) == 4


class TestSemestresFournis:
    @pytest.fixture
    def datasets(self, racine):
        return DataManager.scanner_fichiers_locaux(str(racine))["semestre_data_s5.py"]

    def test_hugo_complete(self, datasets):
        report = Calculator().recompute_all(DataManager.normaliser_donnees(datasets["semestre_data_hugo"]))
        assert report.overall.state is OverallState.COMPLETE
        assert report.overall.color_tag is ColorTag.GREEN
        assert all(r.status_display == "Validé" for r in report.modules.values())

    def test_lea_partial(self, datasets):
        semestre = DataManager.normaliser_donnees(datasets["semestre_data_lea"])
        report = Calculator().recompute_all(semestre)
        assert report.modules["bloc-1"].status_display == "Validé"
        assert report.modules["bloc-3"].status_display == "Non Validé"
        assert report.modules["bloc-4"].counted_ects == 1
        assert report.subjects["projet"].required_final_display == "Impossible"
        assert report.overall.overall_display == "10.34 (18/30 ECTS complete)"
        assert report.overall.color_tag is ColorTag.ORANGE


class TestTableaux:
    def test_recap(self, semestre_partiel):
        report = Calculator().recompute_all(semestre_partiel)
        df = DataManager.tableau_recap(semestre_partiel, report)
        assert len(df) == 3
        assert list(df["Matière"]) == ["Maths", "Info", "Physique"]
        physique = df[df["Matière"] == "Physique"].iloc[0]
        assert physique["Résultat bloc"] == "In Progress"
        assert physique["Requis"] == "Need 10.67"

    def test_blocs(self, semestre_partiel):
        semestre_partiel.modules[1].subjects[0].final = None
        report = Calculator().recompute_all(semestre_partiel)
        df = DataManager.tableau_blocs(semestre_partiel, report)
        assert list(df["Résultat"]) == ["Validé", "In Progress"]
        assert list(df["MOG affichée"]) == ["12.00", "—"]
