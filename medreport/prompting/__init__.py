from medreport.prompting.builder import build_prompt, join_documents

__all__ = ["build_prompt", "join_documents"]
