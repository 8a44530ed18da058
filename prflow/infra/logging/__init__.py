from prflow.infra.logging.console import ConsoleLogger
from prflow.infra.logging.logfire import LogfireLogger, configure_logfire

__all__ = ["ConsoleLogger", "LogfireLogger", "configure_logfire"]
