"""Scoring services.  Every service except ``score_store`` is pure and synchronous."""
