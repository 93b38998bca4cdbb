from .result import Result, Success, Failure, GatewayError
from .gateway import DataGateway

__all__ = ['Result', 'Success', 'Failure', 'GatewayError', 'DataGateway']
