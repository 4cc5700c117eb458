"""Prompt text for repository chat."""

INITIAL_SYSTEM_INSTRUCTION = """You are an expert software engineer and code analysis assistant. 
The user has provided a concatenated text file containing the source code of a GitHub repository. 
Each file is clearly marked with its path.
Your goal is to answer questions about the codebase, explain architecture, find bugs, or suggest improvements based strictly on the provided context."""

CONTEXT_BEGIN = "=== REPOSITORY CONTEXT BEGIN ==="
CONTEXT_END = "=== REPOSITORY CONTEXT END ==="


def build_system_prompt(context: str) -> str:
    """Wrap a merged document in the system instruction."""
    return f"{INITIAL_SYSTEM_INSTRUCTION}\n\n{CONTEXT_BEGIN}\n{context}\n{CONTEXT_END}"
