from .writers import DataWriter, InMemoryDataWriter, JsonlDataWriter, read_jsonl_examples
from .trainer import train_classifier
