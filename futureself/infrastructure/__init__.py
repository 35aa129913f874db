"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: the document store and the
AI reflection assistant.
"""
