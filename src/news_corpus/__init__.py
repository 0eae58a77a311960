"""Build sentiment-ready corpus tables from exported newspaper articles."""

from .assembler import assemble
from .models import ArticleRecord, PipelineResult, RawArticle
from .pipeline import run_pipeline

__all__ = [
    "ArticleRecord",
    "PipelineResult",
    "RawArticle",
    "assemble",
    "run_pipeline",
]
