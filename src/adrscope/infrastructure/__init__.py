"""Infrastructure layer — file discovery, document parsing, and templates.

Depends on the domain layer, never on services or commands.
"""
