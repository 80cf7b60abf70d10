from .renderer import grid_to_image, image_to_bw_pixels, image_to_grid, load_image

__all__ = ["grid_to_image", "image_to_bw_pixels", "image_to_grid", "load_image"]
