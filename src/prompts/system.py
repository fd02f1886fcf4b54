"""System prompt definitions used by the chat service."""

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant. Answer the user's question clearly and accurately."
)

CONTEXT_SYSTEM_PROMPT = (
    "You are a helpful assistant. Use the provided context to answer questions "
    "accurately. If the information is not in the context, state that you don't "
    "have that information."
)
