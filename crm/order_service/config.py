"""
Order service settings
"""

from crm.shared.config import DatabaseSettings, UpstreamSettings


class OrderServiceSettings(DatabaseSettings, UpstreamSettings):
    """Settings for the order service process"""

    service_name: str = "order-service"
    port: int = 8002
