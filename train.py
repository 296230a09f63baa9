import argparse
import logging

from relex import RelationExtractorConfig, RelationExtractionPipeline
from relex.utils import load_config_as_namespace, flatten_namespace
from relex.training import JsonlDataWriter, train_classifier
from relex.data_processing import iter_documents


def create_parser():
    parser = argparse.ArgumentParser(description="Train a relation classifier from gold-annotated documents")
    parser.add_argument("--config", type=str, default="configs/config.yaml")
    parser.add_argument("--train_data", type=str, default=None, help="Overrides data.train_data")
    parser.add_argument("--output_dir", type=str, default=None, help="Overrides data.output_dir")
    parser.add_argument("--safe_serialization", action="store_true")
    return parser


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    args = create_parser().parse_args()

    config_ns = load_config_as_namespace(args.config)
    data = config_ns.data
    del config_ns.data
    train_data = args.train_data or data.train_data
    output_dir = args.output_dir or data.output_dir

    config = RelationExtractorConfig(is_training=True, **flatten_namespace(config_ns))

    writer = JsonlDataWriter(data.training_examples)
    pipeline = RelationExtractionPipeline(config, data_writer=writer)
    examples = []
    for _, doc_examples in pipeline.process_documents(iter_documents(train_data), show_progress=True):
        examples.extend(doc_examples)
    pipeline.close()
    print("Training examples:", len(examples))

    model = train_classifier(examples, config, show_progress=True)
    model.config.is_training = False
    model.save_pretrained(output_dir, safe_serialization=args.safe_serialization)
    print("Model saved to", output_dir)
