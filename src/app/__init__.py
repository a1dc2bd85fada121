"""App: núcleo da camada de integração de pagamentos.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: value objects de pagamento
- services/: normalizer, dispatcher, verificador de webhooks, fallback
- infra/: implementações concretas de IO (http, crypto)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs estruturados

Padrão: app orquestra; api adapta; config configura; utils apoia.
"""
