"""Application configuration."""

from datetime import time
from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the ordering mini-app."""

    app_name: str = "Mini-app Order"
    app_env: str = getenv("APP_ENV", "dev")
    order_service_url: str = getenv("ORDER_SERVICE_URL", "http://localhost:8080/exec")
    liff_app_id: str = getenv("LIFF_APP_ID", "")
    login_url: str = getenv("LOGIN_URL", f"https://liff.line.me/{getenv('LIFF_APP_ID', '')}")
    embedded_client: bool = getenv("EMBEDDED_CLIENT", "0") == "1"
    delivery_fee: int = int(getenv("DELIVERY_FEE", "30"))
    min_pickup_lead_minutes: int = int(getenv("MIN_PICKUP_LEAD_MINUTES", "29"))
    pickup_days: int = 7
    pickup_slot_minutes: int = 30
    business_open_time: time = time.fromisoformat(getenv("BUSINESS_OPEN_TIME", "10:00"))
    business_close_time: time = time.fromisoformat(getenv("BUSINESS_CLOSE_TIME", "21:00"))
    notification_seconds: float = 4.0
    history_lookback_days: int = 7
    shop_name: str = getenv("SHOP_NAME", "台灣小吃店")
    shop_address: str = getenv("SHOP_ADDRESS", "台灣小吃店")
    shop_phone: str = getenv("SHOP_PHONE", "02-1234-5678")
    dev_identity_secret: str = getenv("DEV_IDENTITY_SECRET", "dev-only-change-me-to-a-long-random-secret")
    dev_identity_algorithm: str = "HS256"
    dev_user_id: str = getenv("DEV_USER_ID", "")
    dev_user_name: str = getenv("DEV_USER_NAME", "")


settings: Settings = Settings()
