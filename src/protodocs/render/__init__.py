"""
Renderers: turn the accumulated document tree into the output file
"""

from loguru import logger

from protodocs.config import PluginParameter
from protodocs.core.protocols import Renderer
from protodocs.render.json_renderer import JsonRenderer
from protodocs.render.template_renderer import TemplateRenderer
from protodocs.render.templates import TemplateSource, read_template, supported_formats, usage


def create_renderer(parameter: PluginParameter) -> Renderer:
    """
    Select the renderer for a batch.

    Raises:
        SourceReadError: The selected template cannot be read
    """
    if parameter.raw:
        logger.debug("Raw JSON output")
        return JsonRenderer()
    return TemplateRenderer(read_template(parameter.template))


__all__ = [
    'JsonRenderer',
    'TemplateRenderer',
    'TemplateSource',
    'create_renderer',
    'read_template',
    'supported_formats',
    'usage',
]
