"""LangChain demos: metadata-filtered embedding search and streaming chat."""

from .config import ChatConfig, MetadataConfig, SearchConfig

__all__ = ["ChatConfig", "MetadataConfig", "SearchConfig"]
