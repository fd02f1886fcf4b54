import os
import requests
import streamlit as st

API_URL = os.getenv("API_URL", "http://localhost:8000")

MODES = {
    "Auto": ("", "I'll automatically use relevant documents when helpful."),
    "Search": ("/search ", "I'll search my documents for information to answer your question."),
    "Direct": ("/ask ", "I'll answer directly without searching documents."),
}

ERROR_MESSAGE = "Sorry, there was an error processing your request. Please try again."

st.set_page_config(page_title="Retrieval Chat", page_icon="💬", layout="wide")

st.title("💬 Retrieval Chat")

with st.sidebar:
    st.header("Settings")
    api = st.text_input("Backend API", API_URL)
    mode = st.radio("Mode", list(MODES), horizontal=True)
    show_context = st.checkbox("Show retrieved documents", value=False)
    st.markdown("---")
    st.markdown(f"**{mode}**: {MODES[mode][1]}")

if "messages" not in st.session_state:
    st.session_state.messages = []


def render_message(m: dict) -> None:
    if m["role"] == "user" and m.get("mode"):
        st.caption(m["mode"])
    if m["role"] == "assistant" and m.get("searchMode"):
        st.caption("Used document search")
    st.markdown(m["content"])
    if show_context and m.get("context"):
        with st.expander("Retrieved documents"):
            for doc in m["context"]:
                st.markdown(f"- {doc['text']}")


if not st.session_state.messages:
    st.info(f"Ask me anything! {MODES[mode][1]}")

for m in st.session_state.messages:
    with st.chat_message(m["role"]):
        render_message(m)

prompt = st.chat_input(f"Type your message... ({mode.lower()} mode)")
if prompt and prompt.strip():
    user_message = {"role": "user", "content": prompt, "mode": mode}
    st.session_state.messages.append(user_message)
    with st.chat_message("user"):
        render_message(user_message)

    with st.chat_message("assistant"):
        with st.spinner("Thinking…"):
            try:
                r = requests.post(
                    f"{api.rstrip('/')}/api/chat",
                    json={"message": f"{MODES[mode][0]}{prompt}"},
                    timeout=120,
                )
                r.raise_for_status()
                data = r.json()
                assistant_message = {
                    "role": "assistant",
                    "content": data["response"],
                    "context": data.get("context"),
                    "searchMode": data.get("searchMode", False),
                }
            except (requests.RequestException, ValueError, KeyError) as e:
                st.error(f"Error: {e}")
                assistant_message = {"role": "assistant", "content": ERROR_MESSAGE}
            render_message(assistant_message)
            st.session_state.messages.append(assistant_message)
