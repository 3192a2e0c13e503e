"""Configuration loader and validation for reconciliation settings."""

from pathlib import Path
from typing import Any, Optional
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class FileInputConfig(BaseModel):
    """
    Configuration for one CSV input.

    ``column_mappings`` maps a model field name to the CSV header holding it;
    fields without a mapping are read from a column of the same name.
    """

    encoding: str = "utf-8"
    delimiter: str = ","
    date_format: str = "%Y-%m-%d"
    column_mappings: dict[str, str] = Field(default_factory=dict)

    def column(self, field_name: str) -> str:
        return self.column_mappings.get(field_name, field_name)


class InputConfig(BaseModel):
    """Configuration for input file parsing."""

    credit_report: FileInputConfig = Field(default_factory=FileInputConfig)
    debts: FileInputConfig = Field(default_factory=FileInputConfig)
    savings: FileInputConfig = Field(default_factory=FileInputConfig)
    income: FileInputConfig = Field(default_factory=FileInputConfig)
    expenses: FileInputConfig = Field(default_factory=FileInputConfig)


class AlertSettings(BaseModel):
    """Thresholds for alerts derived from the debt list."""

    high_apr_threshold: float = 20.0
    promo_window_days: int = 90
    promo_danger_days: int = 30
    payment_window_days: int = 14
    payment_danger_days: int = 3
    upcoming_months: int = 3


class ExcelOutputConfig(BaseModel):
    """Configuration for Excel output."""

    filename_template: str = "credit_reconciliation_{date}_{time}.xlsx"
    include_timestamp: bool = True


class SheetConfig(BaseModel):
    """Configuration for a report sheet."""

    enabled: bool = True
    name: str


class SheetsConfig(BaseModel):
    """Configuration for all report sheets."""

    summary: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Summary"))
    discrepancies: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Balance Discrepancies")
    )
    unmatched: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Not In Your Debts")
    )
    matched: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Matched"))
    alerts: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Alerts"))


class OutputConfig(BaseModel):
    """Configuration for output."""

    currency_symbol: str = "£"
    excel: ExcelOutputConfig = Field(default_factory=ExcelOutputConfig)
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


class ReconConfig(BaseModel):
    """Main configuration model."""

    input: InputConfig = Field(default_factory=InputConfig)
    alerts: AlertSettings = Field(default_factory=AlertSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return ReconConfig().model_dump(mode="json", exclude={"config_file_path"})


def load_config(config_path: Optional[Path] = None) -> ReconConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        ReconConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        # Deep merge user config into defaults
        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return ReconConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def generate_default_config(output_path: Path) -> None:
    """
    Generate a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    yaml_content = """# Credit report reconciliation configuration
# Generated configuration file - customize as needed
#
# input.<file>.column_mappings maps field names to CSV headers, e.g.
#   credit_report:
#     column_mappings:
#       name: "Account Name"
#       balance: "Current Balance"

"""
    yaml_content += yaml.dump(
        get_default_config(), default_flow_style=False, sort_keys=False, allow_unicode=True
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
