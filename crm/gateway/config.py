"""
Gateway settings
"""

from pydantic import field_validator

from crm.shared.config import UpstreamSettings


class GatewaySettings(UpstreamSettings):
    """Settings for the gateway process"""

    service_name: str = "gateway"
    port: int = 8000
    order_service_url: str = "http://localhost:8002"
    compute_default_n: int = 1000

    @field_validator("order_service_url")
    @classmethod
    def strip_order_url_slash(cls, v):
        return v.rstrip("/")
