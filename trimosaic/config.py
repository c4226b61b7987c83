from dataclasses import dataclass, field
from typing import List, Optional
from omegaconf import DictConfig, OmegaConf
from hydra.core.config_store import ConfigStore
import os


@dataclass
class SearchConfig:
    candidates: int = 500      # Candidates evaluated per round
    opacity: int = 128         # Alpha (0-255) of every generated triangle
    proxy_size: int = 128      # Evaluation resolution, 0 = full resolution
    min_gap: int = 1           # Minimum horizontal gap between vertices a and b
    score_mode: str = 'delta'  # 'delta' (footprint only) or 'full'
    workers: int = 0           # 0 = os.cpu_count()
    executor: str = 'thread'   # 'thread' or 'process'
    seed: Optional[int] = None


@dataclass
class OutputConfig:
    png: str = 'output.png'
    svg: Optional[str] = None
    json: Optional[str] = None
    compare: Optional[str] = None
    scale: float = 1.0


@dataclass
class LoggingConfig:
    progress: bool = True
    log_interval: int = 10


@dataclass
class PathsConfig:
    output_dir: str = "."


@dataclass
class TriMosaicConfig:
    triangles_n: int = 100
    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    metrics: List[str] = field(default_factory=lambda: ['mse', 'psnr', 'ssim'])


def register_configs():
    """Register configuration schemas with Hydra."""
    cs = ConfigStore.instance()
    cs.store(name="config", node=TriMosaicConfig)


def load_config(config_path: Optional[str] = None, overrides: Optional[List[str]] = None) -> DictConfig:
    """Load configuration from file with optional overrides."""
    cfg = OmegaConf.structured(TriMosaicConfig)
    if config_path and os.path.exists(config_path):
        cfg = OmegaConf.merge(cfg, OmegaConf.load(config_path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_cli(overrides))
    return cfg


def validate_config(cfg: DictConfig) -> None:
    """Validate configuration values."""
    assert cfg.triangles_n > 0, "triangles_n must be positive"
    assert cfg.search.candidates > 0, "search.candidates must be positive"
    assert 0 <= cfg.search.opacity <= 255, "search.opacity must be between 0 and 255"
    assert cfg.search.proxy_size >= 0, "search.proxy_size must be non-negative"
    assert cfg.search.min_gap >= 1, "search.min_gap must be at least 1"
    assert cfg.search.score_mode in ('delta', 'full'), "search.score_mode must be 'delta' or 'full'"
    assert cfg.search.workers >= 0, "search.workers must be non-negative"
    assert cfg.search.executor in ('thread', 'process'), "search.executor must be 'thread' or 'process'"
    assert cfg.output.scale > 0, "output.scale must be positive"
    assert cfg.logging.log_interval > 0, "logging.log_interval must be positive"

    for metric in cfg.metrics:
        assert metric in ('mse', 'psnr', 'ssim'), f"Unknown metric: {metric}"


def setup_paths(cfg: DictConfig) -> None:
    """Create necessary directories based on configuration."""
    os.makedirs(cfg.paths.output_dir, exist_ok=True)
