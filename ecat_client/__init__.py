"""EtherCAT client data model: PDO layouts, device PDOs, a reference filter, PDO logging and worker threads."""

__version__ = "0.0.1"

__all__ = ["types", "pdo", "filters", "devices", "logger", "thread"]