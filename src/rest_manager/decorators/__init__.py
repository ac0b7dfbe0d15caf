from .retry import retry_decorator, compute_delay, RETRYABLE_FAULTS

__all__ = ['retry_decorator', 'compute_delay', 'RETRYABLE_FAULTS']
