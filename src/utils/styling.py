import streamlit as st

SIDEBAR_CUSTOM_CSS = """
<style>
section[data-testid="stSidebar"] {
    min-width: 240px;
    width: fit-content;
}

section[data-testid="stSidebar"] .stRadio > div[role='radiogroup'] > label[data-baseweb="radio"] {
    font-size: 16px;
    font-weight: 500;
    padding: 12px 8px;
    border-radius: 8px;
    margin-bottom: 4px;
    transition: background 0.2s;
    width: 100%;
    display: block;
    box-sizing: border-box;
    background: transparent;
}

section[data-testid="stSidebar"] .stRadio > div[role='radiogroup'] label[data-baseweb="radio"] > div:first-child {
    display: none;
}

section[data-testid="stSidebar"] label[data-testid="stWidgetLabel"] {
    display: none;
}
</style>
"""

CHAT_CUSTOM_CSS_LIGHT_MODE = """
<style>
.stApp {
    background: #FBF6EF;
    color: #2B1E16;
}

div[data-testid="stChatMessage"] {
    background: #6B4632;
    border-radius: 22px;
    color: #fff;
}

div[data-testid="stChatMessage"] p,
div[data-testid="stChatMessage"] small {
    color: #fff;
}

div[data-testid="stVerticalBlockBorderWrapper"] {
    border-color: #E7D9CC;
    border-radius: 28px;
}

section[data-testid="stSidebar"] .stRadio > div[role='radiogroup'] > label[data-baseweb="radio"]:has(input:checked) {
    background: #F3E7DD;
}
</style>
"""

CHAT_CUSTOM_CSS_DARK_MODE = """
<style>
div[data-testid="stChatMessage"] {
    background: #3b2a20;
    border-radius: 22px;
}

section[data-testid="stSidebar"] .stRadio > div[role='radiogroup'] > label[data-baseweb="radio"]:has(input:checked) {
    background: #0e1117;
}
</style>
"""


def load_custom_css():
    st.markdown(SIDEBAR_CUSTOM_CSS, unsafe_allow_html=True)
    if st.context.theme.type == "dark":
        st.markdown(CHAT_CUSTOM_CSS_DARK_MODE, unsafe_allow_html=True)
    else:
        st.markdown(CHAT_CUSTOM_CSS_LIGHT_MODE, unsafe_allow_html=True)
