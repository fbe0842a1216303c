"""Static asset handling for postpress.

Stylesheets are not processed; the styles directory is copied into the
output tree verbatim.
"""

from __future__ import annotations

import shutil
from pathlib import Path


class AssetPipeline:
    """Copies the styles directory into the output directory.

    Attributes:
        styles_dir (Path): Directory containing source stylesheets.
        output_dir (Path): Directory where the site is written.
    """

    def __init__(self, styles_dir: Path, output_dir: Path):
        """Initialize the asset pipeline.

        Args:
            styles_dir: Source styles directory.
            output_dir: Directory where built assets will be placed.
        """
        self.styles_dir = styles_dir
        self.output_dir = output_dir

    @property
    def target(self) -> Path:
        return self.output_dir / "styles"

    def run(self) -> Path:
        """Copy the styles tree.

        Returns:
            The destination directory.

        Raises:
            FileNotFoundError: If the styles directory does not exist.
        """
        shutil.copytree(self.styles_dir, self.target, dirs_exist_ok=True)
        return self.target
