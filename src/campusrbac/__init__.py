"""campusrbac - role hierarchy, permission matrix and data scoping for college administration."""

__version__ = "0.1.0"
