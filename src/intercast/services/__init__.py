"""Service layer — operations behind the CLI.

INVARIANT: All service functions return ServiceResult.
"""
