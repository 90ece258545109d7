from .http import HttpProviderInvoker

__all__ = ["HttpProviderInvoker"]
