"""
Telemetry exporter - Write recorded telemetry to files.

Provides:
- CSV export (one row per sample)
- JSON export of per-channel samples and statistics
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List
import csv
import json
import numpy as np

from drivesim.telemetry.recorder import TelemetryRecorder


@dataclass
class ExporterConfig:
    """Exporter configuration."""
    output_dir: str = "./telemetry_data"
    include_samples: bool = True   # False writes the statistics summary only


class TelemetryExporter:
    """Export recorder contents for analysis in external tools."""

    def __init__(self, config: ExporterConfig | None = None):
        """Initialize exporter, creating the output directory.

        Args:
            config: Exporter configuration
        """
        self.config = config or ExporterConfig()
        self._output_path = Path(self.config.output_dir)
        self._output_path.mkdir(parents=True, exist_ok=True)

    @property
    def output_path(self) -> Path:
        return self._output_path

    def _resolve_channels(self, recorder: TelemetryRecorder, channels: List[str] | None) -> List[str]:
        names = channels if channels is not None else list(recorder.channels)
        unknown = [n for n in names if recorder.get_channel(n) is None]
        if unknown:
            raise ValueError(f"Unknown telemetry channels: {unknown}")
        return names

    def export_csv(
        self,
        recorder: TelemetryRecorder,
        filename: str = "telemetry.csv",
        channels: List[str] | None = None,
    ) -> Path:
        """Export telemetry to a CSV file.

        The recorder samples every channel together, so rows are aligned
        by sample index using the first channel's timestamps.

        Args:
            recorder: Telemetry recorder with data
            filename: Output filename
            channels: Channels to export (None = all)

        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename
        names = self._resolve_channels(recorder, channels)

        columns = [recorder.channels[n] for n in names]
        times = columns[0].get_times() if columns else np.array([])
        values = [ch.get_values() for ch in columns]

        with open(output_file, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(["time"] + names)
            for i, t in enumerate(times):
                row = [f"{t:.4f}"]
                for name, column in zip(names, values):
                    precision = recorder.channels[name].config.precision
                    row.append(f"{column[i]:.{precision}f}" if i < len(column) else "")
                writer.writerow(row)

        return output_file

    def export_json(
        self,
        recorder: TelemetryRecorder,
        filename: str = "telemetry.json",
        channels: List[str] | None = None,
    ) -> Path:
        """Export telemetry to a JSON file.

        Each channel carries its unit, its summary statistics (min, max,
        mean, last, sample count) and, unless disabled, its samples as
        ``[time, value]`` pairs rounded to the channel precision.

        Args:
            recorder: Telemetry recorder with data
            filename: Output filename
            channels: Channels to export (None = all)

        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename
        names = self._resolve_channels(recorder, channels)

        exported: Dict[str, Dict[str, Any]] = {}
        for name in names:
            channel = recorder.channels[name]
            entry: Dict[str, Any] = {
                "unit": channel.config.unit,
                "statistics": channel.get_state(),
            }
            if self.config.include_samples:
                precision = channel.config.precision
                entry["samples"] = [
                    [round(float(t), 4), round(float(v), precision)]
                    for t, v in zip(channel.get_times(), channel.get_values())
                ]
            exported[name] = entry

        data = {
            "sample_rate_hz": recorder.config.sample_rate_hz,
            "total_samples": sum(recorder.channels[n].count for n in names),
            "channels": exported,
        }

        with open(output_file, 'w') as f:
            json.dump(data, f, indent=2)

        return output_file
