"""
Framebuffer screenshots via Pillow
"""

from PIL import Image

from config import DISPLAY


def framebuffer_to_image(framebuffer, scale=1, foreground=None, background=None):
    """Convert a [row][column] boolean grid into an RGB Pillow image"""
    foreground = foreground or DISPLAY["foreground"]
    background = background or DISPLAY["background"]
    height = len(framebuffer)
    width = len(framebuffer[0]) if height else 0

    img = Image.new("RGB", (width, height), background)
    pixels = img.load()
    for y, row in enumerate(framebuffer):
        for x, lit in enumerate(row):
            if lit:
                pixels[x, y] = foreground

    if scale > 1:
        # Nearest keeps the pixels square and sharp
        img = img.resize((width * scale, height * scale), Image.NEAREST)
    return img


def save_screenshot(framebuffer, filename="screenshot.png", scale=None):
    """Save the framebuffer as PNG (default) or JPEG, returns the file name used"""
    scale = DISPLAY["scale"] if scale is None else scale
    img = framebuffer_to_image(framebuffer, scale)

    output_filename = filename
    if output_filename.lower().endswith((".jpg", ".jpeg")):
        img.save(output_filename, "JPEG", quality=95)
    else:
        if not output_filename.lower().endswith(".png"):
            output_filename += ".png"
        img.save(output_filename, "PNG")
    return output_filename
