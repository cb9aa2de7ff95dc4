# main.py
from config import load_settings
from graph import build_graph
from log_config import setup_logging


def get_user_query():
    print("Welcome to the Cited Answer Formatter (CAF)")
    return input("Enter your search query: ").strip()


if __name__ == "__main__":
    settings = load_settings()
    setup_logging(settings)
    graph = build_graph(settings)

    query = get_user_query()
    question = input("Question for the model (blank for a summary): ").strip()

    final_state = graph.invoke({"query": query, "question": question})

    print("\n========== FINAL OUTPUT ==========\n")
    print(final_state.get("formatted_answer") or "No answer produced.")

    refs = final_state.get("citations") or {}
    if refs:
        print("\nReferences:")
        for label, url in refs.items():
            print(f"{label} {url}")

    out_path = "answer.docx"
    with open(out_path, "wb") as f:
        f.write(final_state["docx_bytes"])
    print(f"\nSaved document to {out_path}")

    print("\n========== END ==========")
