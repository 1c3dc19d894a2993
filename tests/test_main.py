"""Tests for the server entry point's config preparation."""

from __future__ import annotations

from pathlib import Path

from omegaconf import DictConfig, OmegaConf

from motor_cover.main import _resolve_data_paths


class TestResolveDataPaths:
    def test_relative_path_anchored_to_launch_dir(self, test_cfg: DictConfig, tmp_path: Path) -> None:
        test_cfg.data.policies_csv = "data/policies.csv"
        _resolve_data_paths(test_cfg, tmp_path)
        assert test_cfg.data.policies_csv == str(tmp_path / "data" / "policies.csv")

    def test_absolute_path_unchanged(self, test_cfg: DictConfig, tmp_path: Path) -> None:
        absolute = str(tmp_path / "elsewhere.csv")
        test_cfg.data.policies_csv = absolute
        _resolve_data_paths(test_cfg, Path("/launch"))
        assert test_cfg.data.policies_csv == absolute

    def test_struct_config_accepted(self, tmp_path: Path) -> None:
        cfg = OmegaConf.create({"data": {"policies_csv": "policies.csv"}})
        OmegaConf.set_struct(cfg, True)
        _resolve_data_paths(cfg, tmp_path)
        assert cfg.data.policies_csv == str(tmp_path / "policies.csv")
