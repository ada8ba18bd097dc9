#!/usr/bin/env python3
"""
Cyberguard: Neural Backend Export

Exports a fine-tuned 2-class HuggingFace classifier (BERT-style, WordPiece
vocabulary) to the ONNX graph and vocab.txt consumed by the neural backend.

Steps:
- Export with inputs ``input_ids``/``attention_mask`` and output ``logits``
- Optional INT8 dynamic quantization
- Check the graph with onnx.checker
- Check that WordPieceTokenizer ids match the HuggingFace tokenizer
- Check that ONNX logits match PyTorch logits

Usage:
    python -m scripts.export.export_onnx --model path/to/bert-cyberbully
    python -m scripts.export.export_onnx --model path/to/bert-cyberbully --quantize
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import torch
import torch.nn as nn
from transformers import AutoModelForSequenceClassification, AutoTokenizer

try:
    import onnx
    from onnxruntime.quantization import quantize_dynamic, QuantType
    ONNX_AVAILABLE = True
except ImportError:
    ONNX_AVAILABLE = False

from cyberguard.models.pipeline import result_from_logits
from cyberguard.models.runner import OnnxBackend
from cyberguard.models.tokenizer import DEFAULT_MAX_LENGTH, WordPieceTokenizer

from scripts import ASSETS_DIR

SAMPLE_TEXTS = [
    "Kill yourself",
    "Have a great day!",
    "you are embarrassing",
    "Your existence is burden",
    "kill the process on the server",
    "Nobody asked for your opinion, loser",
]


class LogitsOnly(nn.Module):
    """Return only logits so the graph has a single output."""

    def __init__(self, model):
        super().__init__()
        self.model = model

    def forward(self, input_ids: torch.Tensor, attention_mask: torch.Tensor) -> torch.Tensor:
        return self.model(input_ids=input_ids, attention_mask=attention_mask).logits


def resolve_model_dir(model_dir: str) -> Path:
    path = Path(model_dir)
    if not path.exists():
        raise FileNotFoundError(f"Model directory not found: {path}")
    if (path / "best_model").exists():
        path = path / "best_model"
    return path


def export_model(model_path: Path, output_path: Path, max_length: int, opset_version: int = 14) -> Path:
    """Export the classifier to ONNX and validate the graph."""
    model = AutoModelForSequenceClassification.from_pretrained(str(model_path))
    if model.config.num_labels != 2:
        raise ValueError(f"Expected a 2-class classifier, got {model.config.num_labels} labels")
    model.eval()

    tokenizer = AutoTokenizer.from_pretrained(str(model_path))
    dummy = tokenizer(
        "This is a sample sentence for exporting the model.",
        return_tensors="pt",
        max_length=max_length,
        padding="max_length",
        truncation=True,
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    print(f"Exporting to {output_path} (opset {opset_version}, length {max_length})...")
    torch.onnx.export(
        LogitsOnly(model),
        (dummy["input_ids"], dummy["attention_mask"]),
        str(output_path),
        input_names=["input_ids", "attention_mask"],
        output_names=["logits"],
        dynamic_axes={
            "input_ids": {0: "batch_size", 1: "sequence_length"},
            "attention_mask": {0: "batch_size", 1: "sequence_length"},
            "logits": {0: "batch_size"},
        },
        opset_version=opset_version,
        do_constant_folding=True,
    )

    onnx.checker.check_model(onnx.load(str(output_path)))
    size_mb = output_path.stat().st_size / (1024 * 1024)
    print(f"✓ ONNX graph is valid ({size_mb:.2f} MB)")
    return output_path


def quantize(onnx_path: Path, output_path: Path) -> Path:
    quantize_dynamic(str(onnx_path), str(output_path), weight_type=QuantType.QInt8)
    orig = onnx_path.stat().st_size / (1024 * 1024)
    quant = output_path.stat().st_size / (1024 * 1024)
    print(f"Quantized: {orig:.2f} MB -> {quant:.2f} MB ({(1 - quant / orig) * 100:.1f}% smaller)")
    return output_path


def write_vocab(model_path: Path, output_dir: Path) -> Path:
    """Write vocab.txt ordered by token id."""
    tokenizer = AutoTokenizer.from_pretrained(str(model_path))
    vocab = tokenizer.get_vocab()
    if not any(token.startswith("##") for token in vocab):
        raise ValueError("Tokenizer is not WordPiece; the neural backend cannot encode for it")
    ordered = sorted(vocab.items(), key=lambda item: item[1])
    vocab_path = output_dir / "vocab.txt"
    vocab_path.write_text("\n".join(token for token, _ in ordered) + "\n", encoding="utf-8")
    print(f"Wrote {len(ordered)} tokens to {vocab_path}")
    return vocab_path


def check_tokenizer(model_path: Path, vocab_path: Path, max_length: int, texts: List[str]) -> bool:
    """Compare WordPieceTokenizer ids against the HuggingFace tokenizer."""
    hf_tokenizer = AutoTokenizer.from_pretrained(str(model_path))
    ours = WordPieceTokenizer.from_file(str(vocab_path), max_length=max_length)

    all_match = True
    for text in texts:
        expected = hf_tokenizer(
            text, max_length=max_length, padding="max_length", truncation=True,
        )["input_ids"]
        actual = ours.encode(text).input_ids.tolist()
        if expected != actual:
            all_match = False
            print(f"  ⚠ Token mismatch for: {text[:50]}")
    print("✓ Tokenizers agree" if all_match else "⚠ Tokenizers disagree on some samples")
    return all_match


def check_logits(
    model_path: Path,
    onnx_path: Path,
    vocab_path: Path,
    max_length: int,
    texts: List[str],
    atol: float = 1e-3,
) -> Dict[str, float]:
    """Compare PyTorch and ONNX logits on encoded samples."""
    model = AutoModelForSequenceClassification.from_pretrained(str(model_path))
    model.eval()
    runner = OnnxBackend().load(str(onnx_path))
    tokenizer = WordPieceTokenizer.from_file(str(vocab_path), max_length=max_length)

    max_diff = 0.0
    for text in texts:
        encoding = tokenizer.encode(text)
        with torch.no_grad():
            expected = model(
                input_ids=torch.as_tensor(encoding.input_ids).unsqueeze(0),
                attention_mask=torch.as_tensor(encoding.attention_mask).unsqueeze(0),
            ).logits.numpy().reshape(-1)
        actual = runner.run(encoding.input_ids, encoding.attention_mask)
        max_diff = max(max_diff, float(np.abs(expected - actual).max()))
        result = result_from_logits(actual)
        print(f"  {text[:40]:40s} risk={result.risk_level:3d} bullying={result.is_cyberbullying}")

    status = "✓" if max_diff <= atol else "⚠"
    print(f"{status} Maximum logit difference: {max_diff:.6f}")
    return {"max_logit_diff": max_diff}


def export_neural_backend(
    model_dir: str,
    output_dir: str,
    max_length: int = DEFAULT_MAX_LENGTH,
    quantize_model: bool = False,
    texts: Optional[List[str]] = None,
) -> Dict[str, str]:
    """Full export: graph, vocabulary, checks and metadata."""
    model_path = resolve_model_dir(model_dir)
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    texts = texts or SAMPLE_TEXTS

    print("=" * 60)
    print("Cyberguard neural backend export")
    print("=" * 60)

    print("\n[1/4] Exporting to ONNX...")
    onnx_path = export_model(model_path, output_path / "cyberbully_model.onnx", max_length)
    if quantize_model:
        onnx_path = quantize(onnx_path, output_path / "cyberbully_model_int8.onnx")

    print("\n[2/4] Writing vocabulary...")
    vocab_path = write_vocab(model_path, output_path)

    print("\n[3/4] Checking tokenizer...")
    tokenizer_ok = check_tokenizer(model_path, vocab_path, max_length, texts)

    print("\n[4/4] Checking logits...")
    stats = check_logits(model_path, onnx_path, vocab_path, max_length, texts)

    metadata = {
        "model_path": onnx_path.name,
        "vocab_path": vocab_path.name,
        "max_length": max_length,
        "quantized": quantize_model,
        "tokenizer_match": tokenizer_ok,
        **stats,
    }
    with open(output_path / "metadata.json", "w") as f:
        json.dump(metadata, f, indent=2)

    print(f"\nExport complete: {output_path}")
    return {"model": str(onnx_path), "vocab": str(vocab_path)}


def main():
    """CLI interface."""
    parser = argparse.ArgumentParser(description="Export a classifier for the cyberguard neural backend")
    parser.add_argument("--model", type=str, required=True, help="Fine-tuned HuggingFace model directory")
    parser.add_argument("--output", type=str, default=str(ASSETS_DIR / "models"), help="Output directory")
    parser.add_argument("--max-length", type=int, default=DEFAULT_MAX_LENGTH, help="Sequence length")
    parser.add_argument("--quantize", action="store_true", help="Apply INT8 dynamic quantization")

    args = parser.parse_args()

    if not ONNX_AVAILABLE:
        print("Error: onnx and onnxruntime required")
        print("Install with: pip install 'cyberguard[torch]'")
        sys.exit(1)

    try:
        export_neural_backend(args.model, args.output, args.max_length, args.quantize)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
