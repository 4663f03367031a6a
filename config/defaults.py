from config.schema import AppConfig, DeadlineConfig, DisplayConfig, StorageConfig


def default_app_config() -> AppConfig:
    """Standard-Konfiguration.

    Daten liegen unter data/store/ (lectures.json, deadlines.json).
    Abgabetermine bleiben einen Tag nach Fälligkeit in der aktiven Liste.
    Ausgabe in deutscher Zeit (Europe/Berlin).
    """
    return AppConfig(
        storage=StorageConfig(),
        deadlines=DeadlineConfig(grace_days=1),
        display=DisplayConfig(timezone="Europe/Berlin"),
        log_level="WARNING",
    )
