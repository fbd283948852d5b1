"""Conversion pipeline: capture source, decoding, scaling, output."""
