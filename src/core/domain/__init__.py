"""Domain models, references and errors.

Pure data structures (Pydantic v2) and pure functions: the domain knows
nothing about HTTP, GraphQL or the CLI.
"""
