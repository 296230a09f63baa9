import argparse
import json
import logging

from relex import RelationClassifier, RelationExtractionPipeline
from relex.config import DEFAULT_GOLD_VIEW_NAME
from relex.evaluation import RelationEvaluator
from relex.data_processing import load_documents
from relex.data_processing.document import relations_to_dicts


def create_parser():
    parser = argparse.ArgumentParser(description="Predict relations and score them against the gold view")
    parser.add_argument("--model", type=str, default="models/relex", help="Path to model folder")
    parser.add_argument("--data", type=str, default="data/dev.jsonl", help="Documents with a gold view")
    parser.add_argument("--gold_view", type=str, default=DEFAULT_GOLD_VIEW_NAME)
    parser.add_argument("--print_errors", action="store_true")
    parser.add_argument("--error_output", type=str, default=None)
    parser.add_argument("--predictions", type=str, default=None, help="Optional JSONL output of predictions")
    return parser


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    args = create_parser().parse_args()

    model = RelationClassifier.from_pretrained(
        args.model,
        is_training=False,
        gold_view_name=args.gold_view,
        print_errors=args.print_errors,
        error_output=args.error_output,
    )
    pipeline = RelationExtractionPipeline(model.config, classifier=model)

    documents = load_documents(args.data)
    results = pipeline.process_documents(documents, show_progress=True)
    pipeline.close()

    all_outs = [added for _, added in results]
    all_true = [doc.get_view(args.gold_view).relations for doc in documents]
    evaluator = RelationEvaluator(all_true, all_outs)
    output_str, _ = evaluator.evaluate()
    print(output_str)
    per_category, _ = evaluator.evaluate(average=None)
    print(per_category)

    if args.predictions:
        with open(args.predictions, "w") as f:
            for doc, added in results:
                f.write(json.dumps({"id": doc.doc_id, "relations": relations_to_dicts(added)}) + "\n")
