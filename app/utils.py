import streamlit as st

from models import ColorTag


def inject_css():
    """Injecte le CSS personnalisé."""
    st.markdown("""
        <style>
        .metric-card { background-color: #f0f2f6; border-radius: 10px; padding: 15px; box-shadow: 2px 2px 5px rgba(0,0,0,0.1); }
        .success-box { padding: 10px; border-radius: 5px; background-color: #d4edda; color: #155724; border: 1px solid #c3e6cb; }
        .warning-box { padding: 10px; border-radius: 5px; background-color: #fff3cd; color: #856404; border: 1px solid #ffeeba; }
        .need-cell { font-size: 0.85rem; color: #555; }
        </style>
    """, unsafe_allow_html=True)


def colorer(texte, tag):
    """Texte markdown coloré selon le tag (noir = texte brut)."""
    if tag is ColorTag.BLACK:
        return texte
    return f":{tag.value}[{texte}]"


# Couleurs des barres par statut de bloc
COULEURS_STATUT = {
    "Validé": "#2ecc71",
    "Non Validé": "#e74c3c",
    "In Progress": "#f1c40f",
    "—": "#bdc3c7",
}
