"""
Product Feed Banner Generator

Modules:
    models      - Data models (Product, RenderConfig)
    common      - Shared utilities (config loader, logging, price/text helpers, errors)
    feed        - Feed acquisition through fallback relays and XML normalization
    rendering   - Layout engine, fonts, photo loading and JPEG export
    batch       - Sequential batch rendering with pacing
    session     - Application state and caller-facing entry points
"""
