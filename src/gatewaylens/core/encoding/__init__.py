"""Encoders and decoders for metrics wire formats."""
