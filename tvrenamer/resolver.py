"""Target resolution: compute the new path for one episode file."""
import logging
import os
from pathlib import Path

from .config import Arguments
from .errors import EpisodeNotFound, TargetError, TargetErrorReason
from .metadata import MetadataLookup
from .models import RenderContext
from .tokenizer import render

log = logging.getLogger(__name__)


def _leaves_directory(name: str) -> bool:
    """Whether a rendered name would put the target outside the source directory."""
    separators = {"/", "\\", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    return any(sep in name for sep in separators)


def resolve(
    source: Path,
    season_no: int,
    episode_no: int,
    arguments: Arguments,
    metadata: MetadataLookup | None = None,
    series_id: int | None = None,
) -> Path:
    """
    Compute the destination path of one episode file.

    The target always lives in the source's directory; only the name changes.

    Args:
        source: Episode file
        season_no: Season number
        episode_no: Episode number
        arguments: Run configuration (template, pad length, mode flags)
        metadata: Title lookup, required when ``arguments.titles`` is set
        series_id: Series id already obtained from ``metadata.search_series``

    Returns:
        The destination path

    Raises:
        TargetError: If the extension or parent directory is missing, the
            rendered name contains a path separator, or the episode does not
            exist in the metadata service
        MetadataError: If the title lookup fails for another reason
    """
    source = Path(source)

    extension = source.suffix
    if not extension:
        raise TargetError(TargetErrorReason.EXTENSION, source, episode_no)

    parent = source.parent
    if not source.name or parent == source or not parent.is_dir():
        raise TargetError(TargetErrorReason.PARENT, source, episode_no)

    title = ""
    if arguments.titles:
        if metadata is None or series_id is None:
            raise ValueError("title lookup needs a metadata lookup and a series id")
        try:
            title = metadata.episode_title(series_id, season_no, episode_no)
        except EpisodeNotFound as e:
            raise TargetError(
                TargetErrorReason.EPISODE_DOES_NOT_EXIST, source, episode_no
            ) from e

    context = RenderContext(
        series="" if arguments.no_name else arguments.series_name,
        season=season_no,
        episode=episode_no,
        title=title,
        pad_length=arguments.pad_length,
    )
    name = render(arguments.template, context)
    if not name:
        # ".mkv" alone would be a hidden file with no extension
        name = source.stem
    if _leaves_directory(name):
        raise TargetError(TargetErrorReason.PARENT, source, episode_no)
    target = parent / f"{name}{extension}"
    log.debug("Resolved %s -> %s", source.name, target.name)
    return target
