"""
Sample clustering result used when no tree file is given.

A mix of tech, cooking and infrastructure notes, in the same JSON shape the
clustering step returns.
"""

SAMPLE_NOTE_TITLES = {
    "1": "Transformer Architecture Basics",
    "2": "Attention Mechanisms Explained",
    "3": "Perfect Sourdough Bread",
    "4": "React useEffect Hooks",
    "5": "BERT vs GPT",
    "6": "Optimizing React Rendering",
    "7": "Carbonara Recipe",
    "8": "Vision Transformers (ViT)",
    "9": "Typescript Generics",
    "10": "Pizza Napoletana",
    "11": "Large Language Models (LLMs)",
    "12": "Tailwind CSS Grid",
    "13": "Self-Attention Math",
    "14": "Sous Vide Steak",
    "15": "Kubernetes Pods",
}


def _notes(cluster_id, note_ids):
    return [
        {
            "id": f"{cluster_id}-n{note_id}",
            "name": SAMPLE_NOTE_TITLES[note_id],
            "type": "note",
            "noteId": note_id,
        }
        for note_id in note_ids
    ]


SAMPLE_CLUSTERS = [
    {
        "id": "ai",
        "name": "Artificial Intelligence",
        "type": "cluster",
        "description": "Transformers, attention and language models",
        "children": _notes("ai", ["1", "2", "5", "8", "11", "13"]),
    },
    {
        "id": "cooking",
        "name": "Cooking",
        "type": "cluster",
        "description": "Recipes and techniques",
        "children": _notes("cooking", ["3", "7", "10", "14"]),
    },
    {
        "id": "webdev",
        "name": "Web Development",
        "type": "cluster",
        "description": "React, TypeScript and CSS",
        "children": _notes("webdev", ["4", "6", "9", "12"]),
    },
    {
        "id": "devops",
        "name": "DevOps",
        "type": "cluster",
        "description": "Infrastructure and deployment",
        "children": _notes("devops", ["15"]),
    },
]
