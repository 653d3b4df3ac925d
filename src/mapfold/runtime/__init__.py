"""Runtime services: structured logging and opt-in parallel mapping.

Submodules are imported directly (``mapfold.runtime.observability``,
``mapfold.runtime.concurrency``) since concurrency builds on the core mappers.
"""
