"""Claude Bootstrap: scaffold projects for the Claude TDD + Scrumban workflow."""

__version__ = "0.1.0"
