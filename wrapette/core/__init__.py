"""Wrapette core: Wrap, Flow, Executor and unit helpers."""
