from gigafind.adapters.render.render import OutputFormat, RenderOptions, render

__all__ = ["OutputFormat", "RenderOptions", "render"]
