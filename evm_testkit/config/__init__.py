"""
Configuration management for evm-testkit
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass
class NetworkConfig:
    """Dev chain network configuration"""
    name: str
    rpc_url: str
    chain_id: int
    timeout: int = 30


class ConfigManager:
    """Loads network definitions from networks.yaml"""

    def __init__(self, config_dir: str = None):
        if config_dir is None:
            config_dir = Path(__file__).parent
        self.config_dir = Path(config_dir)

        self._networks_config = None

    def load_networks(self) -> Dict[str, Any]:
        """Load networks configuration file"""
        if self._networks_config is None:
            networks_path = self.config_dir / "networks.yaml"
            with open(networks_path, 'r') as f:
                self._networks_config = yaml.safe_load(f)

        return self._networks_config

    def get_network_config(self, network_name: str = None) -> NetworkConfig:
        """Get specific network configuration"""
        networks = self.load_networks()

        if network_name is None:
            network_name = networks.get('default_network', 'anvil')

        network_data = {
            key: self.expand_env_vars(value) if isinstance(value, str) else value
            for key, value in networks['networks'][network_name].items()
        }
        for key in ('chain_id', 'timeout'):
            if key in network_data:
                network_data[key] = int(network_data[key])

        return NetworkConfig(name=network_name, **network_data)

    def expand_env_vars(self, text: str) -> str:
        """Expand ${VAR} and ${VAR:-default} references from the environment"""
        def replace_env_var(match):
            var_name, default = match.group(1), match.group(2)
            if default is None:
                default = match.group(0)
            return os.getenv(var_name, default)

        return re.sub(r'\$\{([^}:]+)(?::-([^}]*))?\}', replace_env_var, text)

    def validate_config(self) -> bool:
        """Validate configuration completeness"""
        try:
            networks = self.load_networks()

            default_network = networks.get('default_network', 'anvil')
            if default_network not in networks['networks']:
                raise ValueError(f"Unknown default network: {default_network}")

            for name in networks['networks']:
                network = self.get_network_config(name)
                if not network.rpc_url:
                    raise ValueError(f"Network {name} has no rpc_url")

            return True

        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            return False


def load_environment(env_file: str = ".env") -> bool:
    """
    Load environment variables from file

    Args:
        env_file: Path to environment file

    Returns:
        True if the file existed and was loaded
    """
    env_path = Path(env_file)

    if env_path.exists():
        load_dotenv(env_path)
        logger.info(f"Loaded environment from {env_file}")
        return True

    logger.warning(f"Environment file {env_file} not found")
    return False


# Global config manager instance
config_manager = ConfigManager()


def get_network_config(network_name: Optional[str] = None) -> NetworkConfig:
    """Get network configuration"""
    return config_manager.get_network_config(network_name)


def validate_config() -> bool:
    """Validate configuration"""
    return config_manager.validate_config()


__all__ = [
    'ConfigManager',
    'NetworkConfig',
    'config_manager',
    'load_environment',
    'get_network_config',
    'validate_config'
]
