"""
Customer service settings
"""

from crm.shared.config import DatabaseSettings


class CustomerServiceSettings(DatabaseSettings):
    """Settings for the customer service process"""

    service_name: str = "customer-service"
    port: int = 8001
