# semestre_data_s5.py
# notes : (partiel, examen) ; poids : (partiel, examen), 0.4 / 0.6 si absent

semestre_data_vide = {
    "nom": "S5 - vierge",
    "blocs": [
        {
            "id": "bloc-1", "nom": "Bloc 1 - Mathématiques",
            "matieres": [
                {"id": "analyse", "nom": "Analyse", "ects": 6, "notes": (None, None)},
                {"id": "algebre", "nom": "Algèbre linéaire", "ects": 6, "notes": (None, None)},
                {"id": "proba", "nom": "Probabilités", "ects": 3, "notes": (None, None), "poids": (0.5, 0.5)},
            ],
        },
        {
            "id": "bloc-2", "nom": "Bloc 2 - Informatique",
            "matieres": [
                {"id": "algo", "nom": "Algorithmique", "ects": 5, "notes": (None, None)},
                {"id": "bdd", "nom": "Bases de données", "ects": 4, "notes": (None, None), "poids": (0.3, 0.7)},
                {"id": "projet", "nom": "Projet tutoré", "ects": 2, "notes": (None, None), "poids": (1, 0)},
            ],
        },
        {
            "id": "bloc-3", "nom": "Bloc 3 - Communication",
            "matieres": [
                {"id": "anglais", "nom": "Anglais", "ects": 2, "notes": (None, None), "poids": (0.5, 0.5)},
                {"id": "expression", "nom": "Expression écrite", "ects": 1, "notes": (None, None)},
            ],
        },
        {
            "id": "bloc-4", "nom": "Bloc 4 - Langue vivante 2",
            "matieres": [
                {"id": "spanish", "nom": "Espagnol", "ects": 1, "notes": (None, None)},
                {"id": "german", "nom": "Allemand", "ects": 1, "notes": (None, None)},
            ],
            "options": [("spanish", "german")],
        },
    ],
}

semestre_data_lea = {
    "nom": "S5 - Léa",
    "blocs": [
        {
            "id": "bloc-1", "nom": "Bloc 1 - Mathématiques",
            "matieres": [
                {"id": "analyse", "nom": "Analyse", "ects": 6, "notes": (12.5, 9)},
                {"id": "algebre", "nom": "Algèbre linéaire", "ects": 6, "notes": (8, 11.25)},
                {"id": "proba", "nom": "Probabilités", "ects": 3, "notes": (14, 13), "poids": (0.5, 0.5)},
            ],
        },
        {
            "id": "bloc-2", "nom": "Bloc 2 - Informatique",
            "matieres": [
                {"id": "algo", "nom": "Algorithmique", "ects": 5, "notes": (15, None)},
                {"id": "bdd", "nom": "Bases de données", "ects": 4, "notes": (7.5, None), "poids": (0.3, 0.7)},
                {"id": "projet", "nom": "Projet tutoré", "ects": 2, "notes": (16, None), "poids": (1, 0)},
            ],
        },
        {
            "id": "bloc-3", "nom": "Bloc 3 - Communication",
            "matieres": [
                {"id": "anglais", "nom": "Anglais", "ects": 2, "notes": (6, 8), "poids": (0.5, 0.5)},
                {"id": "expression", "nom": "Expression écrite", "ects": 1, "notes": (9, 10)},
            ],
        },
        {
            "id": "bloc-4", "nom": "Bloc 4 - Langue vivante 2",
            "matieres": [
                {"id": "spanish", "nom": "Espagnol", "ects": 1, "notes": (13, None)},
                {"id": "german", "nom": "Allemand", "ects": 1, "notes": (None, None)},
            ],
            "options": [("spanish", "german")],
        },
    ],
}

semestre_data_hugo = {
    "nom": "S5 - Hugo",
    "blocs": [
        {
            "id": "bloc-1", "nom": "Bloc 1 - Mathématiques",
            "matieres": [
                {"id": "analyse", "nom": "Analyse", "ects": 6, "notes": {"midterm": 17, "final": 15.5}},
                {"id": "algebre", "nom": "Algèbre linéaire", "ects": 6, "notes": {"midterm": 14, "final": 12}},
                {"id": "proba", "nom": "Probabilités", "ects": 3, "notes": {"midterm": 11, "final": 16},
                 "poids": {"midterm": 0.5, "final": 0.5}},
            ],
        },
        {
            "id": "bloc-2", "nom": "Bloc 2 - Informatique",
            "matieres": [
                {"id": "algo", "nom": "Algorithmique", "ects": 5, "notes": (12, 14)},
                {"id": "bdd", "nom": "Bases de données", "ects": 4, "notes": (10, 12), "poids": (0.3, 0.7)},
                {"id": "projet", "nom": "Projet tutoré", "ects": 2, "notes": (18, 18), "poids": (1, 0)},
            ],
        },
        {
            "id": "bloc-3", "nom": "Bloc 3 - Communication",
            "matieres": [
                {"id": "anglais", "nom": "Anglais", "ects": 2, "notes": (15, 13), "poids": (0.5, 0.5)},
                {"id": "expression", "nom": "Expression écrite", "ects": 1, "notes": (12, 11)},
            ],
        },
        {
            "id": "bloc-4", "nom": "Bloc 4 - Langue vivante 2",
            "matieres": [
                {"id": "spanish", "nom": "Espagnol", "ects": 1, "notes": (None, None)},
                {"id": "german", "nom": "Allemand", "ects": 1, "notes": (11, 12.5)},
            ],
            "options": [("spanish", "german")],
        },
    ],
}
