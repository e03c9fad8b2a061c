"""
Setup de logging configurável para a API de municípios.

Carrega configuração de logs a partir de arquivo YAML.
"""
import logging
import logging.config
from pathlib import Path
from typing import Optional, Union

import yaml

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    config_path: Optional[Union[str, Path]] = None,
    default_level: int = logging.INFO,
) -> bool:
    """
    Configura o sistema de logging a partir de arquivo YAML.

    Args:
        config_path: Caminho para o arquivo de configuração YAML.
                     Se None, usa o arquivo padrão em municipios_api/config/logging_config.yaml
        default_level: Nível de logging padrão caso não consiga carregar a configuração

    Returns:
        True se a configuração YAML foi aplicada, False se caiu no fallback
    """
    if config_path is None:
        config_path = Path(__file__).parent / "logging_config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        logging.basicConfig(level=default_level, format=DEFAULT_FORMAT)
        logging.warning(f"Arquivo de configuração não encontrado: {config_path}")
        logging.info("Usando configuração de logging padrão")
        return False

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
        logging.config.dictConfig(config)
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        # Fallback para configuração básica se houver erro
        logging.basicConfig(level=default_level, format=DEFAULT_FORMAT)
        logging.error(f"Erro ao carregar configuração de logging: {e}")
        logging.warning("Usando configuração de logging padrão")
        return False

    logging.getLogger(__name__).info(f"Logging configurado a partir de: {config_path}")
    return True


def get_logger(name: str) -> logging.Logger:
    """
    Retorna um logger configurado.

    Args:
        name: Nome do logger (geralmente __name__ do módulo)

    Returns:
        Logger configurado
    """
    return logging.getLogger(name)
