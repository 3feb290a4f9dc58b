"""
JSON schemas shipped with mwdeploy.
"""
