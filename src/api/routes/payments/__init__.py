"""Rotas HTTP de pagamentos."""
