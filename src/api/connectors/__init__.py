"""Connectors: adapters de borda para APIs externas.

Estrutura:
- payments/: Flooss, Jawali e PayPal

Cada provider tem seu próprio adapter, garantindo isolamento de falhas.
"""

__all__: list[str] = []
