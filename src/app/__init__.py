"""App — coração do relay: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: tipos de domínio (eventos Shopify, log de notificações, erros)
- use_cases/: casos de uso (processamento de evento, disparo de notificação)
- services/: serviços de aplicação (telefone, elegibilidade)
- infra/: implementações concretas de IO (Redis, Firestore, memória)
- protocols/: contratos/interfaces
- observability/: correlation id

Padrão: app executa; api adapta; config configura; utils apoia.
"""
