"""Pricing models: closed-form Black-Scholes and the Black-Scholes generator."""
