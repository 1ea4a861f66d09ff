"""Application Layer.

Infrastructure and application services that orchestrate domain logic.
This layer handles I/O, external APIs, and coordinates domain operations.
"""
