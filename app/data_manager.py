import glob
import importlib.util
import logging
import os

import pandas as pd
import streamlit as st

from config import TIRET
from models import Module, Semester, Subject, parse_number

logger = logging.getLogger(__name__)

PREFIXE_DATASET = "semestre_data_"
CIBLES_DEFAUT = {"target_passing_grade": 10.0, "target_mog": 10.0}


class DataManager:
    @staticmethod
    def init_state():
        """Initialise la session si elle n'existe pas."""
        if "semestre" not in st.session_state:
            st.session_state.semestre = None
        for cle, defaut in CIBLES_DEFAUT.items():
            if cle not in st.session_state:
                st.session_state[cle] = defaut

    @staticmethod
    def cibles():
        """Objectifs saisis dans la barre latérale."""
        return {cle: st.session_state.get(cle, defaut) for cle, defaut in CIBLES_DEFAUT.items()}

    @staticmethod
    def _lire_paire(valeur, cles):
        # V1 : tuple (a, b) ; V2 : dict {cle_a: a, cle_b: b}
        if valeur is None:
            return None, None
        if isinstance(valeur, (list, tuple)) and len(valeur) == 2:
            return valeur[0], valeur[1]
        if isinstance(valeur, dict):
            return valeur.get(cles[0]), valeur.get(cles[1])
        raise ValueError(f"Paire illisible : {valeur!r}")

    @staticmethod
    def normaliser_donnees(data_raw, nom="Semestre"):
        """Transforme un dataset brut (dict de blocs) en Semester."""
        semestre = Semester(nom=data_raw.get("nom", nom))
        vus = set()

        for i, bloc in enumerate(data_raw.get("blocs", []), start=1):
            module = Module(module_id=str(bloc.get("id", f"bloc-{i}")), nom=bloc.get("nom", f"Bloc {i}"))

            for matiere in bloc.get("matieres", []):
                sid = matiere.get("id")
                if not sid:
                    raise ValueError(f"Matière sans identifiant dans {module.nom}")
                if sid in vus:
                    raise ValueError(f"Identifiant de matière en double : {sid}")
                vus.add(sid)

                ects = parse_number(matiere.get("ects"))
                if ects is None or ects < 0:
                    raise ValueError(f"ECTS invalides pour {sid} : {matiere.get('ects')!r}")

                midterm, final = DataManager._lire_paire(matiere.get("notes"), ("midterm", "final"))
                poids_m, poids_f = DataManager._lire_paire(matiere.get("poids"), ("midterm", "final"))

                module.subjects.append(Subject(
                    subject_id=sid,
                    nom=matiere.get("nom", sid),
                    ects=ects,
                    midterm=parse_number(midterm),
                    final=parse_number(final),
                    midterm_weight=poids_m,
                    final_weight=poids_f,
                ))

            ids_bloc = {s.subject_id for s in module.subjects}
            for paire in bloc.get("options", []):
                a, b = paire
                if a not in ids_bloc or b not in ids_bloc:
                    raise ValueError(f"Option inconnue dans {module.nom} : {paire!r}")
                module.electives.append((a, b))

            DataManager.appliquer_exclusivite(module)
            semestre.modules.append(module)

        return semestre

    @staticmethod
    def appliquer_exclusivite(module):
        """
        Une seule option d'une paire compte à la fois.

        Si une seule des deux a une note saisie, l'autre est désactivée et
        vidée ; si aucune n'a de note, les deux redeviennent saisissables.
        Si les deux ont des notes, rien ne change.
        """
        for id_a, id_b in module.electives:
            a, b = module.subject(id_a), module.subject(id_b)
            if a.has_input and not b.has_input:
                b.active = False
                b.clear_scores()
            elif b.has_input and not a.has_input:
                a.active = False
                a.clear_scores()
            elif not a.has_input and not b.has_input:
                a.active = True
                b.active = True

    @staticmethod
    def scanner_fichiers_locaux(dossier="."):
        """Trouve les fichiers semestre_data_*.py et leurs datasets."""
        datasets = {}
        for filepath in sorted(glob.glob(os.path.join(dossier, f"{PREFIXE_DATASET}*.py"))):
            nom_fichier = os.path.basename(filepath)
            try:
                spec = importlib.util.spec_from_file_location(nom_fichier[:-3], filepath)
                module = importlib.util.module_from_spec(spec)
                spec.loader.exec_module(module)
            except Exception as e:
                logger.warning("Erreur chargement %s : %s", filepath, e)
                continue
            vars_module = {k: v for k, v in vars(module).items() if k.startswith(PREFIXE_DATASET)}
            if vars_module:
                datasets[nom_fichier] = vars_module
                logger.info("%s : %d dataset(s)", nom_fichier, len(vars_module))
        return datasets

    @staticmethod
    def tableau_recap(semestre, report):
        """Une ligne par matière avec ses résultats, pour affichage et graphiques."""
        lignes = []
        for module in semestre.modules:
            res_bloc = report.modules[module.module_id]
            for s in module.subjects:
                res = report.subjects[s.subject_id]
                lignes.append({
                    "Bloc": module.nom,
                    "Matière": s.nom,
                    "ECTS": s.ects,
                    "Partiel": res.clamped_midterm,
                    "Examen": res.clamped_final,
                    "Requis": res.required_final_display,
                    "Moyenne": res.weighted_average,
                    "Active": s.active,
                    "Résultat bloc": res_bloc.status_display,
                })
        return pd.DataFrame(lignes, columns=[
            "Bloc", "Matière", "ECTS", "Partiel", "Examen", "Requis", "Moyenne", "Active", "Résultat bloc",
        ])

    @staticmethod
    def tableau_blocs(semestre, report):
        """MOG et statut de chaque bloc (MOG à None tant que rien n'est terminé)."""
        lignes = [{
            "Bloc": m.nom,
            "ECTS": report.modules[m.module_id].counted_ects,
            "MOG": report.modules[m.module_id].current_mog,
            "Résultat": report.modules[m.module_id].status_display,
        } for m in semestre.modules]
        df = pd.DataFrame(lignes, columns=["Bloc", "ECTS", "MOG", "Résultat"])
        df["MOG affichée"] = df["MOG"].apply(lambda x: TIRET if pd.isna(x) else f"{x:.2f}")
        return df
