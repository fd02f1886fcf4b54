"""Prompt used when retrieved documents are handed to the model."""

CONTEXT_SEPARATOR = "\n\n"

CONTEXT_USER_PROMPT = "Context:\n{context}\n\nQuestion: {question}"
