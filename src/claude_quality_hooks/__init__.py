"""
Claude Quality Hooks - lint, test, format and scan hooks for Claude Code.

Components:
- lint: Run the project's linter on a file after it is edited
- test-on-save: Run the companion test file of an edited source file
- format-staged: Format staged files before commit and re-stage them
- security-scan: Flag hardcoded secrets and unsafe code idioms
- commit-msg: Enforce the conventional commit subject format
"""

__version__ = "0.1.0"
