"""
Sample course used by the preview app and the tests.
"""

from coursekit.schemas import Course


SAMPLE_COURSE = {
    "id": "course-react",
    "title": "React Fundamentals",
    "description": "Learn the fundamentals of React.",
    "thumbnail": "https://images.unsplash.com/photo-1633356122544-f134324a6cee?w=1200&h=700&fit=crop",
    "published": True,
    "certificate_available": True,
    "chapters": [
        {
            "id": "ch-1",
            "title": "Getting Started",
            "lessons": [
                {
                    "id": "l-1",
                    "title": "Introduction to React",
                    "video_url": "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4",
                    "duration": "12:45",
                    "content": "<p>Welcome to React! This lesson covers core ideas.</p>",
                    "quiz": {
                        "id": "q-1",
                        "question": "What is React mainly used for?",
                        "options": ["Styling websites", "Building UIs", "Database management", "OS development"],
                        "answer_index": 1,
                    },
                },
                {
                    "id": "l-2",
                    "title": "Environment Setup",
                    "duration": "08:30",
                    "content": "<p>Install Node, npm, and create-react-app or Vite.</p>",
                    "attachments": [
                        {"id": "att-1", "name": "setup-guide.pdf", "url": "data:application/pdf;base64,JVBERi0xLjQK"},
                    ],
                },
            ],
        },
        {
            "id": "ch-2",
            "title": "Components",
            "lessons": [
                {
                    "id": "l-3",
                    "title": "Functional Components",
                    "duration": "15:20",
                    "content": "<p>Learn functional components and hooks.</p>",
                    "quiz": {
                        "id": "q-2",
                        "question": "Which hook is used for state in functional components?",
                        "options": ["useEffect", "useState", "useRef", "useMemo"],
                        "answer_index": 1,
                    },
                },
            ],
        },
    ],
}


def sample_course() -> Course:
    """Return a fresh copy of the React Fundamentals sample course."""
    return Course.model_validate(SAMPLE_COURSE)
