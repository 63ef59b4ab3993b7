"""Component Chameleon — component lookup, alternatives and BOM health over an LLM oracle."""

__version__ = "0.1.0"
