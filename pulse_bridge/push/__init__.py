from .client import PushClient, load_service_account

__all__ = ["PushClient", "load_service_account"]
