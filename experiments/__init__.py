"""Experiment harness: config loading, scenarios, sweep reporting."""
