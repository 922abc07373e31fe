"""
CourseKit - Course content tree, learner progress and rewards.

Sub-packages:
- schemas: Pydantic models for courses, progress and rewards
- authoring: Tree editor, course admin service and the course API port
- classroom: Progress tracking, rewards, quizzes, navigation and reports
- storage: Key-value persistence port and state snapshots
- viewer: HTML renderers for outlines, quizzes and certificates
- utils: Configuration, ids and media helpers
"""

__version__ = "0.1.0"
