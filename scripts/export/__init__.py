"""
Export Scripts

- export_onnx.py: Export a fine-tuned classifier for the neural backend
"""
