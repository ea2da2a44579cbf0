"""Aggregation engine: metrics, redistribution, reducer, selection and views."""
