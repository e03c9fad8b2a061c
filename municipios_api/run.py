import uvicorn

from municipios_api.config.logging_setup import setup_logging
from municipios_api.config.settings import get_settings


def main():
    """Inicia o servidor da API localmente."""
    settings = get_settings()

    # Configurar logging a partir do arquivo YAML
    setup_logging(settings.log_config)

    print(f"Iniciando API em http://{settings.host}:{settings.port}")
    print("Pressione CTRL+C para sair.")

    uvicorn.run(
        "municipios_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None  # Usar configuração já inicializada
    )


if __name__ == "__main__":
    main()
