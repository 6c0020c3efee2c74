import logging

import streamlit as st
from utils import inject_css
from ui import ui_sidebar, ui_semestre

# 1. Config & Utils
st.set_page_config(page_title="Calculateur ECTS", layout="wide", page_icon="🎓")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
inject_css()

# 2. Interface
def main():
    ui_sidebar()

    st.title("🎓 Calculateur de Moyenne ECTS")
    ui_semestre()

if __name__ == "__main__":
    main()
