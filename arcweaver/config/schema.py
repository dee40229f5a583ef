"""
ArcWeaver v0.1.0

Configuration schema for ArcWeaver.

Defines all available configuration parameters with defaults and validation.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


class ConfigValidationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


VALID_WEIGHT_MODES = ['abundance', 'kmer_count']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
VALID_COMPRESSION = ['none', 'gzip']

# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Conversion
    # ========================================================================
    'conversion': {
        'kmer_size': None,  # Must match the k used to run BCALM2
        'weight': 'abundance',  # 'abundance' (km:f:) or 'kmer_count' (KC:i: / #k-mers)
        'check_overlaps': False,  # Verify (k-1)-overlaps against target unitigs
        'id_bits': 64,  # Width of doubled node ids in downstream tools
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'compression': 'none',  # 'none', 'gzip' (also implied by a .gz suffix)

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,  # Also log to this file if set
        },
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        ConfigValidationError: If the file is not valid YAML or not a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in config file {config_path}: {e}"
            )

        if user_config is None:
            return config
        if not isinstance(user_config, dict):
            raise ConfigValidationError(
                f"Config file {config_path} must contain a mapping at the top level"
            )

        # Deep merge user config into defaults
        config = _deep_merge(config, user_config)
        _check_sections(config, config_path)

    return config


def _check_sections(config: Dict[str, Any], config_path: Path):
    """Reject sections that were replaced by something other than a mapping."""
    sections = [
        ('conversion', config.get('conversion')),
        ('output', config.get('output')),
    ]
    if isinstance(config.get('output'), dict):
        sections.append(('output.logging', config['output'].get('logging')))

    for name, value in sections:
        if not isinstance(value, dict):
            raise ConfigValidationError(
                f"Section '{name}' in config file {config_path} must be a mapping, "
                f"got {type(value).__name__}"
            )


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

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


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge command-line overrides into configuration.

    Args:
        config: Configuration dictionary
        overrides: Values keyed by dotted path (e.g. 'conversion.kmer_size');
                   None values are skipped

    Returns:
        New configuration dictionary
    """
    result = copy.deepcopy(config)
    for key, value in overrides.items():
        if value is None:
            continue

        keys = key.split('.')
        target = result
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'strict')
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # The strict template checks every overlap and uses BCALM2's integer k-mer counts
    if template == 'strict':
        config['conversion']['check_overlaps'] = True
        config['conversion']['weight'] = 'kmer_count'
        config['output']['logging']['level'] = 'DEBUG'

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any], require_kmer_size: bool = False) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate
        require_kmer_size: Report a missing k-mer size as an error

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    conversion = config.get('conversion', {})

    k = conversion.get('kmer_size')
    if k is None:
        if require_kmer_size:
            errors.append("conversion.kmer_size is required")
    elif isinstance(k, bool) or not isinstance(k, int) or k < 2:
        errors.append(f"Invalid kmer_size: {k!r} (must be an integer >= 2)")

    if conversion.get('weight') not in VALID_WEIGHT_MODES:
        errors.append(
            f"Invalid weight mode: {conversion.get('weight')!r} "
            f"(choose from {', '.join(VALID_WEIGHT_MODES)})"
        )

    if not isinstance(conversion.get('check_overlaps'), bool):
        errors.append("conversion.check_overlaps must be true or false")

    id_bits = conversion.get('id_bits')
    if isinstance(id_bits, bool) or not isinstance(id_bits, int) or id_bits < 1:
        errors.append(f"Invalid id_bits: {id_bits!r} (must be a positive integer)")

    output = config.get('output', {})
    if output.get('compression') not in VALID_COMPRESSION:
        errors.append(f"Invalid output compression: {output.get('compression')!r}")

    level = output.get('logging', {}).get('level')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level!r}")

    return errors
