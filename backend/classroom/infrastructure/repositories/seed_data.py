"""Seed Data — demo catalogue loaded into the in-memory backend on startup."""

from classroom.core.domain_types import ResourceType
from classroom.core.entities import Resource

DEMO_VIDEO_URL = "https://www.w3schools.com/html/mov_bbb.mp4"

DEMO_COURSES: list[dict] = [
    {
        "id": "1",
        "title": "React Fundamentals",
        "description": "Learn the basics of React including components, hooks, and state management.",
        "thumbnail": "/react-course-thumbnail.jpg",
        "video_url": DEMO_VIDEO_URL,
        "video_title": "React Fundamentals Tutorial",
        "content": (
            "This comprehensive course covers React fundamentals including functional "
            "components, hooks, state management, and more. Perfect for beginners "
            "looking to master React development."
        ),
        "resources": [
            Resource(name="slides.pdf", type=ResourceType.PDF, url="/pdf-document.png"),
            Resource(name="starter-code.zip", type=ResourceType.ZIP, url="/zip-file.png"),
        ],
    },
    {
        "id": "2",
        "title": "TypeScript Advanced",
        "description": "Master advanced TypeScript concepts and patterns for production applications.",
        "thumbnail": "/typescript-course.jpg",
        "video_url": DEMO_VIDEO_URL,
        "video_title": "TypeScript Advanced Patterns",
        "content": (
            "Deep dive into advanced TypeScript features including generics, decorators, "
            "advanced types, and design patterns. Ideal for experienced developers."
        ),
        "resources": [
            Resource(name="slides.pdf", type=ResourceType.PDF, url="/pdf-slides.jpg"),
        ],
    },
    {
        "id": "3",
        "title": "Next.js Full Stack",
        "description": "Build full-stack applications with Next.js, API routes, and databases.",
        "thumbnail": "/nextjs-course.png",
        "video_url": DEMO_VIDEO_URL,
        "video_title": "Next.js Full Stack Development",
        "content": (
            "Learn how to build complete full-stack applications using Next.js with "
            "server-side rendering, API routes, authentication, and database integration."
        ),
        "resources": [
            Resource(name="slides.pdf", type=ResourceType.PDF, url="/pdf-document.png"),
            Resource(name="project-files.zip", type=ResourceType.ZIP, url="/zip.jpg"),
        ],
    },
]
