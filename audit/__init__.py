"""
Credentialing Audit Log

Stores every change to the tracked credentialing tables and renders each
change as a readable summary with a field-level diff.
"""
