"""
Test suite for limit-order-codec

Contains:
- tests/unit/          : Unit tests for the encoders, order builder, typed data and signer
"""
