"""API: camada de borda com os provedores de pagamento.

Responsabilidades:
- Traduzir requisições canônicas para o formato de cada provider
- Autenticar chamadas (HMAC, API key, OAuth2)
- Verificar autenticidade de webhooks
- Expor endpoints HTTP (health, process, webhooks)

Subpastas:
- connectors/: adapters HTTP por provider
- routes/: endpoints HTTP

NÃO PODE conter: persistência, regras de negócio sobre quando cobrar.
"""
