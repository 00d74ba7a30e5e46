"""Blackjack rules: hand evaluation, wagering and outcomes."""
