"""Recalculate team elo standings from match results."""
