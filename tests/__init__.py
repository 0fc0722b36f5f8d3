"""
FITS Cutter - Test Suite

Test Organization:
- test_planner.py: Pixel window planning and projection
- test_header.py: Output header derivation
- test_image.py: Source image access
- test_processor.py: Single cutout end to end
- test_runner.py: Batch runs and failure isolation
- test_table.py: Position table parsing
- test_config.py: Settings loading
- test_cli.py: Command-line scenarios

Fixtures are in tests/fixtures/:
- images.py: ImageFactory for synthetic FITS images

Run tests:
    $ pdm run pytest tests/ -v
"""
