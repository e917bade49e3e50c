from showlist.infrastructure.monitoring.health_checker import HealthChecker, HealthStatus

__all__ = ["HealthChecker", "HealthStatus"]
