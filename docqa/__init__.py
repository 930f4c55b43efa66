"""DocQA: summarize a PDF and answer questions about it."""
