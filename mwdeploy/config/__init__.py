"""
Request model and validation package.

This package contains the DeployRequest value, the builder that expands
shorthand options, and the validators for requests and the config file.
"""

__all__ = ['request', 'validation']
