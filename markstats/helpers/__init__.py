"""
Helpers package - stdlib-only utilities shared by every layer.

Nothing in here may import from components, workflows, services or interfaces.
"""
