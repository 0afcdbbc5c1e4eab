"""Bridge de webhooks FluxCD -> Pushover.

Este pacote contém:
- constants: valores fixos (defaults, respostas, timeouts)
- config: carregamento e validação da configuração via ambiente
- models: alerta do Flux (schema estrito) e mensagem do Pushover
- utils: helpers de string
- formatters: transformação alerta -> texto da notificação
- ports: interfaces Logger / NotificationSender
- services: cliente HTTP da API do Pushover
- controller: criação do Flask app e endpoints
- server: ciclo de vida do servidor e health check
- logging: configuração do structlog
- cli: entrypoint do processo
"""
