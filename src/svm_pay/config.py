"""Runtime configuration for SVM-Pay adapters.

Settings come from the process environment, optionally seeded from a
``.env`` file. Existing environment variables always win over the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import dotenv_values

from svm_pay.networks import DEFAULT_RPC_URLS, SVMNetwork

ENV_PREFIX = "SVM_PAY_"

DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_COMMITMENT = "confirmed"


def _rpc_env_key(network: SVMNetwork) -> str:
    return f"{ENV_PREFIX}{network.name}_RPC_URL"


@dataclass
class SVMPayConfig:
    """Configuration for network adapters."""

    rpc_urls: dict[SVMNetwork, str] = field(
        default_factory=lambda: dict(DEFAULT_RPC_URLS)
    )
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    commitment: str = DEFAULT_COMMITMENT

    def rpc_url(self, network: SVMNetwork) -> str:
        return get_rpc_url(network, self.rpc_urls.get(network))


def get_rpc_url(network: SVMNetwork, custom_url: Optional[str] = None) -> str:
    """Resolve the endpoint an adapter for ``network`` should talk to.

    A non-empty ``custom_url`` (typically an entry from
    ``SVMPayConfig.rpc_urls`` set through ``SVM_PAY_<NETWORK>_RPC_URL``) is
    returned unchanged once ``network`` is known to be supported. An empty
    override falls back to the public endpoint in ``DEFAULT_RPC_URLS``.
    ``network`` may be an enum member or its prefix string.

    Raises:
        ValueError: If ``network`` is not an SVM network.
    """
    try:
        default_url = DEFAULT_RPC_URLS[SVMNetwork(network)]
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unsupported SVM network: {network}") from e
    return custom_url or default_url


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[str] = None,
) -> SVMPayConfig:
    """
    Build a :class:`SVMPayConfig` from environment variables.

    Recognised variables are ``SVM_PAY_<NETWORK>_RPC_URL`` (for example
    ``SVM_PAY_SONIC_RPC_URL``), ``SVM_PAY_HTTP_TIMEOUT`` and
    ``SVM_PAY_COMMITMENT``.

    Args:
        environ: Variables to read. Defaults to :data:`os.environ`.
        env_file: Optional ``.env`` file whose values fill in missing keys.

    Raises:
        ValueError: If ``SVM_PAY_HTTP_TIMEOUT`` is not a positive number.
    """
    merged: dict[str, str] = {}
    if env_file is not None:
        merged.update(
            {k: v for k, v in dotenv_values(env_file).items() if v is not None}
        )
    merged.update(os.environ if environ is None else environ)

    config = SVMPayConfig()
    for network in SVMNetwork:
        url = merged.get(_rpc_env_key(network))
        if url:
            config.rpc_urls[network] = url

    timeout = merged.get(f"{ENV_PREFIX}HTTP_TIMEOUT")
    if timeout:
        try:
            config.http_timeout = float(timeout)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}HTTP_TIMEOUT must be a number, got {timeout!r}")
        if config.http_timeout <= 0:
            raise ValueError(f"{ENV_PREFIX}HTTP_TIMEOUT must be positive, got {timeout!r}")

    commitment = merged.get(f"{ENV_PREFIX}COMMITMENT")
    if commitment:
        config.commitment = commitment

    return config
