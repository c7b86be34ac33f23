"""Preview module for output and visualization.

Components:
    display: Matplotlib-based preview and tone mapping
    export: PNG export via Pillow
    interactive: Taichi GGUI viewer stepping through camera images

Example:
    >>> from prism.preview import save_pngs, show_images
    >>> from prism.scene import create_demo_scene
    >>>
    >>> images = create_demo_scene(width=320, height=240).par_raytrace()
    >>> save_pngs(images)
    ['cam-0.png', 'cam-1.png']
    >>> show_images(images)

The Taichi viewer lives in prism.preview.interactive and is imported
separately, since it needs an initialized Taichi runtime.
"""

from prism.preview.display import (
    ToneMapMethod,
    apply_gamma,
    color_channels,
    process_image_for_display,
    show_images,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from prism.preview.export import compute_rmse, image_to_uint8, save_png, save_pngs

__all__ = [
    # Display functions
    "show_preview",
    "show_images",
    # Tone mapping
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "color_channels",
    "process_image_for_display",
    "ToneMapMethod",
    # Export functions
    "save_png",
    "save_pngs",
    "image_to_uint8",
    "compute_rmse",
]
