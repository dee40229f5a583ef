#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ArcWeaver v0.1.0

Tests for configuration loading and validation.

Author: ArcWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
import yaml

from arcweaver.config.schema import (
    DEFAULT_CONFIG,
    ConfigValidationError,
    apply_overrides,
    load_config,
    save_config_template,
    validate_config,
)


class TestLoadConfig:
    """Test loading and merging configuration files."""

    def test_defaults(self):
        """Test that no file gives a copy of the defaults."""
        config = load_config()

        assert config == DEFAULT_CONFIG
        config['conversion']['kmer_size'] = 31
        assert DEFAULT_CONFIG['conversion']['kmer_size'] is None

    def test_user_values_override(self, temp_output_dir):
        """Test that user values are deep-merged over the defaults."""
        path = temp_output_dir / "config.yaml"
        path.write_text("conversion:\n  kmer_size: 31\n")

        config = load_config(path)

        assert config['conversion']['kmer_size'] == 31
        assert config['conversion']['weight'] == 'abundance'

    def test_invalid_yaml(self, temp_output_dir):
        """Test that broken YAML raises ConfigValidationError."""
        path = temp_output_dir / "config.yaml"
        path.write_text("conversion: [unclosed\n")

        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_non_mapping(self, temp_output_dir):
        """Test that a top-level list is rejected."""
        path = temp_output_dir / "config.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigValidationError, match="mapping"):
            load_config(path)

    def test_missing_file(self, temp_output_dir):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(temp_output_dir / "absent.yaml")

    @pytest.mark.parametrize("text, section", [
        ("conversion: 5\n", "conversion"),
        ("output: [gzip]\n", "output"),
        ("output:\n  logging: DEBUG\n", "output.logging"),
    ])
    def test_section_not_mapping(self, temp_output_dir, text, section):
        """Test that a section replaced by a scalar or list is rejected."""
        path = temp_output_dir / "config.yaml"
        path.write_text(text)

        with pytest.raises(ConfigValidationError, match=f"Section '{section}'"):
            load_config(path)


class TestOverrides:
    """Test command-line overrides."""

    def test_dotted_keys(self):
        """Test that dotted keys set nested values and None is skipped."""
        config = apply_overrides(DEFAULT_CONFIG, {
            'conversion.kmer_size': 21,
            'conversion.weight': None,
        })

        assert config['conversion']['kmer_size'] == 21
        assert config['conversion']['weight'] == 'abundance'
        assert DEFAULT_CONFIG['conversion']['kmer_size'] is None


class TestValidation:
    """Test configuration validation."""

    def test_defaults_valid(self):
        """Test that the defaults validate when k is not required."""
        assert validate_config(DEFAULT_CONFIG) == []

    def test_kmer_size_required(self):
        """Test that a missing k is reported when required."""
        errors = validate_config(DEFAULT_CONFIG, require_kmer_size=True)

        assert errors == ["conversion.kmer_size is required"]

    def test_invalid_values(self):
        """Test that bad values are each reported."""
        config = apply_overrides(DEFAULT_CONFIG, {
            'conversion.kmer_size': 1,
            'conversion.weight': 'median',
            'conversion.id_bits': 0,
            'output.logging.level': 'LOUD',
        })

        errors = validate_config(config)

        assert len(errors) == 4


class TestTemplates:
    """Test template generation."""

    @pytest.mark.parametrize("template", ['default', 'strict'])
    def test_template_round_trip(self, temp_output_dir, template):
        """Test that written templates load back and validate."""
        path = temp_output_dir / f"{template}.yaml"

        save_config_template(path, template=template)

        config = load_config(path)
        assert validate_config(config) == []
        assert config['conversion']['check_overlaps'] is (template == 'strict')

    def test_template_is_yaml(self, temp_output_dir):
        """Test that the template contains every section."""
        path = temp_output_dir / "config.yaml"

        save_config_template(path)

        assert set(yaml.safe_load(path.read_text())) == {'conversion', 'output'}

# ArcWeaver v0.1.0
# Any usage is subject to this software's license.
