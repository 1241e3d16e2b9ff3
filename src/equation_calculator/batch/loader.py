"""Read equations from a text file or a compressed archive."""
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr
import py7zr.exceptions
from pydantic import BaseModel, ConfigDict, Field, FilePath

from equation_calculator.common.logger import logger

# Extraction filters exist from Python 3.12 and in the 3.10.12+ / 3.11.4+ security releases
TAR_EXTRACT_OPTIONS: dict = {"filter": "data"} if hasattr(tarfile, "data_filter") else {}


class EquationLoader(BaseModel):
    """
    Load the equations of a batch input, one per line.

    Supported inputs:
    - plain text file (``.txt``)
    - archives containing a ``.txt`` file: ``.zip``, ``.tar.xz``, ``.7z``
    """

    model_config = ConfigDict(frozen=True)

    input_file: FilePath = Field(..., description="Path to the input file or archive")

    def read_text(self) -> str:
        """
        Return the raw text of the input, extracting it from the archive if needed.

        :return: Content of the text file
        :rtype: str
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        if self.input_file.suffix == ".txt":
            return self.input_file.read_text(encoding="utf-8")
        return self._extract_archive(self.input_file)

    def load(self) -> List[str]:
        """
        Return the non-empty, stripped lines of the input.

        :return: List of equations
        :rtype: List[str]
        """
        lines: List[str] = [line.strip() for line in self.read_text().splitlines()]
        equations = [line for line in lines if line]
        logger.info(f"📄 Loaded {len(equations)} equation(s) from {self.input_file}")
        return equations

    @staticmethod
    def _extract_archive(archive_path: Path) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content.

        Corrupt or unreadable archives are reported as ValueError.

        :param Path archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If the archive is corrupt, has no .txt file or its format is unsupported
        """
        try:
            return EquationLoader._extract_first_txt(archive_path)
        except (zipfile.BadZipFile, tarfile.TarError, py7zr.exceptions.Bad7zFile) as exc:
            raise ValueError(f"📄❌ Corrupt archive {archive_path.name}: {exc}") from exc

    @staticmethod
    def _extract_first_txt(archive_path: Path) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content.

        :param Path archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If no .txt file is found or format is unsupported
        """
        # Extract into a throwaway directory, never next to the archive
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)
            if archive_path.suffix == ".zip":
                with zipfile.ZipFile(archive_path, "r") as zf:
                    names = [name for name in zf.namelist() if name.endswith(".txt")]
                    if not names:
                        raise ValueError("📄❌ No .txt file found in zip archive")
                    zf.extract(names[0], path=tmpdir_path)
                    return (tmpdir_path / names[0]).read_text(encoding="utf-8")

            if archive_path.suffixes[-2:] == [".tar", ".xz"]:
                with tarfile.open(archive_path, "r:xz") as tf:
                    members = [m for m in tf.getmembers() if m.isfile() and m.name.endswith(".txt")]
                    if not members:
                        raise ValueError("📄❌ No .txt file found in tar.xz archive")
                    tf.extract(members[0], path=tmpdir_path, **TAR_EXTRACT_OPTIONS)
                    return (tmpdir_path / members[0].name).read_text(encoding="utf-8")

            if archive_path.suffix == ".7z":
                with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                    names = [name for name in archive.getnames() if name.endswith(".txt")]
                    if not names:
                        raise ValueError("📄❌ No .txt file found in 7z archive")
                    archive.extract(path=tmpdir_path, targets=[names[0]])
                    return (tmpdir_path / names[0]).read_text(encoding="utf-8")

        raise ValueError(f"📄❌ Unsupported input format: {''.join(archive_path.suffixes) or archive_path.name}")
