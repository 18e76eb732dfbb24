"""Passport MRZ Scanner.

Locates the machine-readable zone on a photographed TD3 passport page,
prepares it for Tesseract OCR-B recognition, and decodes the two 44-character
lines into structured identity fields.
"""

__version__ = "1.0.0"
