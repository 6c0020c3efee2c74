import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from calculator import Calculator, format_ects
from config import CalculConfig
from data_manager import DataManager
from models import parse_number
from utils import COULEURS_STATUT, colorer

COLONNES = [3, 1, 2, 2, 2, 2]


def _calculator():
    return Calculator(CalculConfig.from_mapping(DataManager.cibles()))


def _cle(sid, champ):
    return f"{champ}_{sid}"


def _valeur_widget(note):
    return "" if note is None else f"{note:g}"


def synchroniser_widgets(semestre):
    """Recopie les notes du semestre dans les champs de saisie."""
    for s in semestre.subjects():
        st.session_state[_cle(s.subject_id, "mid")] = _valeur_widget(s.midterm)
        st.session_state[_cle(s.subject_id, "fin")] = _valeur_widget(s.final)


def _on_note_change(sid):
    semestre = st.session_state.semestre
    module = semestre.module_of(sid)
    subject = module.subject(sid)
    subject.midterm = parse_number(st.session_state[_cle(sid, "mid")])
    subject.final = parse_number(st.session_state[_cle(sid, "fin")])

    DataManager.appliquer_exclusivite(module)
    res = _calculator().on_subject_changed(semestre, sid)

    # Écrire depuis un callback ne relance pas ce callback
    if res.clamped_midterm is not None:
        st.session_state[_cle(sid, "mid")] = _valeur_widget(res.clamped_midterm)
    if res.clamped_final is not None:
        st.session_state[_cle(sid, "fin")] = _valeur_widget(res.clamped_final)
    for autre in module.subjects:
        if not autre.active:
            st.session_state[_cle(autre.subject_id, "mid")] = ""
            st.session_state[_cle(autre.subject_id, "fin")] = ""


def ui_sidebar():
    DataManager.init_state()
    with st.sidebar:
        st.header("⚙️ Configuration")

        datasets = DataManager.scanner_fichiers_locaux()
        if datasets:
            f_choisi = st.selectbox("Fichier", list(datasets.keys()))
            if f_choisi:
                d_choisi = st.selectbox("Dataset", list(datasets[f_choisi].keys()))
                if st.button("Charger"):
                    try:
                        semestre = DataManager.normaliser_donnees(datasets[f_choisi][d_choisi], nom=d_choisi)
                    except ValueError as e:
                        st.error(f"Dataset invalide : {e}")
                    else:
                        st.session_state.semestre = semestre
                        synchroniser_widgets(semestre)
                        st.toast(f"Dataset '{d_choisi}' chargé !", icon="🚀")
                        st.rerun()
        else:
            st.caption("Aucun fichier 'semestre_data_*.py' trouvé dans le dossier.")

        st.divider()
        with st.expander("🎯 Objectifs"):
            st.number_input("Note de passage (matière)", 0.0, 20.0, step=0.5, key="target_passing_grade")
            st.number_input("MOG de validation (bloc)", 0.0, 20.0, step=0.5, key="target_mog")

        if st.button("🗑️ Reset", type="primary"):
            st.session_state.semestre = None
            st.rerun()


def ui_dashboard(semestre, report):
    st.header("📊 Tableau de Bord")
    overall = report.overall
    cfg = CalculConfig.from_mapping(DataManager.cibles())

    c_main, c_det = st.columns([1, 2])
    with c_main:
        st.markdown(f"### Moyenne du semestre : {colorer(overall.overall_display, overall.color_tag)}")
        st.caption(f"{format_ects(overall.completed_ects)}/{format_ects(overall.total_ects)} ECTS dans des blocs terminés")
        if overall.gpa is not None:
            fig = go.Figure(go.Indicator(
                mode="gauge+number", value=overall.gpa, title={'text': "Moyenne"},
                gauge={'axis': {'range': [cfg.grade_min, cfg.grade_max]}, 'bar': {'color': "#2b86d9"},
                       'threshold': {'line': {'color': "red", 'width': 4}, 'thickness': 0.75, 'value': cfg.target_mog}}
            ))
            fig.update_layout(height=250, margin=dict(l=20, r=20, t=30, b=20))
            st.plotly_chart(fig, use_container_width=True)

    with c_det:
        df_blocs = DataManager.tableau_blocs(semestre, report)
        df_graph = df_blocs.dropna(subset=["MOG"])
        if not df_graph.empty:
            fig = px.bar(df_graph, x="Bloc", y="MOG", text="MOG affichée", color="Résultat",
                         range_y=[cfg.grade_min, cfg.grade_max], color_discrete_map=COULEURS_STATUT,
                         title="MOG par bloc")
            fig.add_hline(y=cfg.target_mog, line_dash="dash", line_color="black", annotation_text="Validation")
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("Aucun bloc n'a encore de matière terminée.")

    st.dataframe(
        DataManager.tableau_recap(semestre, report),
        use_container_width=True,
        hide_index=True,
        column_config={
            "Moyenne": st.column_config.ProgressColumn("Moyenne", format="%.2f", min_value=0, max_value=20),
        },
    )


def ui_input(semestre, report):
    st.header("📝 Saisie des notes")
    for module in semestre.modules:
        res_bloc = report.modules[module.module_id]
        with st.container(border=True):
            st.subheader(module.nom)
            for col, titre in zip(st.columns(COLONNES), ["Matière", "ECTS", "Partiel", "Examen", "Requis", "Moyenne"]):
                col.caption(titre)

            for s in module.subjects:
                sid = s.subject_id
                res = report.subjects[sid]
                c = st.columns(COLONNES)
                c[0].markdown(f"**{s.nom}**" if s.active else f"~~{s.nom}~~")
                c[1].write(format_ects(s.ects))
                c[2].text_input("Partiel", key=_cle(sid, "mid"), disabled=not s.active,
                                on_change=_on_note_change, args=(sid,), label_visibility="collapsed")
                c[3].text_input("Examen", key=_cle(sid, "fin"), disabled=not s.active,
                                on_change=_on_note_change, args=(sid,), label_visibility="collapsed")
                c[4].write(res.required_final_display)
                c[5].write(res.weighted_average_display)

            m1, m2, m3 = st.columns([1, 3, 1])
            m1.metric("MOG", res_bloc.mog_display)
            m2.markdown(f"**MOG Need**<br><span class='need-cell'>{res_bloc.mog_need_display}</span>",
                        unsafe_allow_html=True)
            m3.metric("Résultat", res_bloc.status_display)


def ui_semestre():
    semestre = st.session_state.semestre
    if semestre is None:
        st.info("👈 Chargez un fichier 'semestre_data_*.py' depuis le menu à gauche.")
        return

    for s in semestre.subjects():
        for champ, note in (("mid", s.midterm), ("fin", s.final)):
            if _cle(s.subject_id, champ) not in st.session_state:
                st.session_state[_cle(s.subject_id, champ)] = _valeur_widget(note)

    report = _calculator().recompute_all(semestre)

    tab1, tab2 = st.tabs(["📝 Saisie", "📊 Tableau de Bord"])
    with tab1:
        ui_input(semestre, report)
    with tab2:
        ui_dashboard(semestre, report)
