"""示例作品集内容

数据库未配置或读取失败时，聚合器回退到这里的数据；
也可以用 seed_store() 向空库写入初始内容。
"""

import copy
from typing import Any, Dict, List

from .categories import Category, LIST_CATEGORIES
from .store import ContentStore, Record

_SOCIAL_LINKS = [
    {"platform": "GitHub", "url": "https://github.com/yourusername", "username": "yourusername"},
    {"platform": "LinkedIn", "url": "https://linkedin.com/in/yourusername", "username": "yourusername"},
    {"platform": "Twitter", "url": "https://twitter.com/yourusername", "username": "@yourusername"},
    {"platform": "Email", "url": "mailto:your.email@example.com"},
]

SAMPLE_PERSONAL_INFO: Dict[str, Any] = {
    "name": "Your Name",
    "headline": "Aspiring Tech Generalist & Creative Leader",
    "short_bio": (
        "I am a 3rd-year CSE student with a startup mindset and a passion for Open Source. "
        "I thrive on exploring diverse technologies, leading collaborative teams, and turning "
        "innovative ideas into reality."
    ),
    "long_bio": (
        "I am currently a 3rd-year Computer Science and Engineering student driven by an insatiable "
        "curiosity for the tech world. I am deeply passionate about Web Development, Cybersecurity, "
        "AI/ML, and Data Science, while also exploring the realms of Android Development and "
        "Competitive Programming.\n\n"
        "Beyond the code, I am an active advocate for Open Source and believe in the power of "
        "community-driven innovation. I possess a strong entrepreneurial spirit and a startup "
        "mentality, constantly looking for opportunities to solve real-world problems."
    ),
    "profile_image_url": "https://placehold.co/400x400/png?text=Profile",
    "resume_url": "/api/generate-cv",
    "location": "Your City, Country",
    "email": "your.email@example.com",
    "phone": "+1 (555) 123-4567",
    "current_status": "3rd Year CSE Student",
    "social_links": _SOCIAL_LINKS,
}

SAMPLE_CONTACT_INFO: Dict[str, Any] = {
    "email": "your.email@example.com",
    "phone": "+1 (555) 123-4567",
    "location": "Your City, Country",
    "availability": "Available for freelance projects and opportunities",
    "preferred_contact_method": "Email",
    "response_time": "Within 24 hours",
    "social_links": _SOCIAL_LINKS,
    "enable_contact_form": True,
    "form_success_message": "Thank you for your message! I'll get back to you soon.",
    "form_error_message": "Something went wrong. Please try again or email me directly.",
}

SAMPLE_ITEMS: Dict[Category, List[Dict[str, Any]]] = {
    Category.SKILLS: [
        {
            "name": "Frontend Development",
            "description": "Building beautiful and responsive user interfaces",
            "skills": [
                {"name": "React", "level": 90, "years_of_experience": 3},
                {"name": "Next.js", "level": 85, "years_of_experience": 2},
                {"name": "TypeScript", "level": 88, "years_of_experience": 2.5},
                {"name": "Tailwind CSS", "level": 92, "years_of_experience": 2},
                {"name": "HTML/CSS", "level": 95, "years_of_experience": 4},
            ],
        },
        {
            "name": "Backend Development",
            "description": "Creating robust and scalable server-side applications",
            "skills": [
                {"name": "Node.js", "level": 85, "years_of_experience": 3},
                {"name": "Python", "level": 80, "years_of_experience": 2},
                {"name": "Express.js", "level": 82, "years_of_experience": 2.5},
                {"name": "PostgreSQL", "level": 78, "years_of_experience": 2},
                {"name": "Firebase", "level": 85, "years_of_experience": 2},
            ],
        },
        {
            "name": "Tools & Technologies",
            "description": "Development tools and platforms I work with",
            "skills": [
                {"name": "Git", "level": 88, "years_of_experience": 4},
                {"name": "VS Code", "level": 95, "years_of_experience": 4},
                {"name": "Docker", "level": 70, "years_of_experience": 1.5},
                {"name": "Vercel", "level": 90, "years_of_experience": 2},
                {"name": "Figma", "level": 75, "years_of_experience": 2},
            ],
        },
        {
            "name": "Soft Skills",
            "description": "Professional and interpersonal capabilities",
            "skills": [
                {"name": "Problem Solving", "level": 90},
                {"name": "Team Collaboration", "level": 88},
                {"name": "Communication", "level": 85},
                {"name": "Time Management", "level": 87},
                {"name": "Adaptability", "level": 92},
            ],
        },
    ],
    Category.EDUCATION: [
        {
            "institution": "University Name",
            "degree": "Bachelor of Science",
            "field": "Computer Science",
            "start_date": "2019-09-01",
            "end_date": "2023-05-31",
            "description": (
                "Focused on software engineering, algorithms, and web development. Completed capstone "
                "project on building a full-stack e-commerce platform."
            ),
            "grade": "3.8 GPA",
            "location": "City, State",
        },
        {
            "institution": "High School Name",
            "degree": "High School Diploma",
            "start_date": "2015-09-01",
            "end_date": "2019-06-15",
            "description": "Graduated with honors. Active in computer science club.",
            "grade": "4.0 GPA",
            "location": "City, State",
        },
    ],
    Category.EXPERIENCE: [
        {
            "role": "Full Stack Developer",
            "company": "Tech Company",
            "company_url": "https://techcompany.com",
            "location": "Remote",
            "start_date": "2023-06-01",
            "is_current": True,
            "description": (
                "• Developed and maintained web applications using React, Next.js, and Node.js\n"
                "• Collaborated with design team to implement responsive UI components\n"
                "• Optimized application performance, reducing load time by 40%\n"
                "• Mentored junior developers and conducted code reviews"
            ),
            "technologies": ["React", "Next.js", "TypeScript", "Node.js", "PostgreSQL"],
            "type": "Full-time",
        },
        {
            "role": "Frontend Developer Intern",
            "company": "Startup Inc.",
            "location": "City, State",
            "start_date": "2022-06-01",
            "end_date": "2022-08-31",
            "description": (
                "• Built responsive web interfaces using React and Tailwind CSS\n"
                "• Integrated RESTful APIs and managed state with Redux\n"
                "• Participated in daily standups and sprint planning"
            ),
            "technologies": ["React", "JavaScript", "Tailwind CSS", "Redux"],
            "type": "Internship",
        },
    ],
    Category.PROJECTS: [
        {
            "title": "E-Commerce Platform",
            "slug": "ecommerce-platform",
            "summary": "A full-featured online shopping platform with payment integration",
            "description": (
                "Built a complete e-commerce solution with product management, shopping cart, payment "
                "processing, and order tracking."
            ),
            "image_url": "https://placehold.co/600x400/png?text=E-Commerce",
            "tech_stack": ["Next.js", "TypeScript", "PostgreSQL", "Stripe", "Tailwind CSS"],
            "github_url": "https://github.com/yourusername/ecommerce",
            "live_url": "https://ecommerce-demo.vercel.app",
            "type": "Personal",
            "featured": True,
            "status": "Completed",
            "start_date": "2023-01-01",
            "end_date": "2023-04-30",
        },
        {
            "title": "Task Management App",
            "slug": "task-manager",
            "summary": "Collaborative task management tool with real-time updates",
            "description": (
                "A productivity app for teams to manage tasks, set deadlines, and track progress."
            ),
            "image_url": "https://placehold.co/600x400/png?text=Task+Manager",
            "tech_stack": ["React", "Firebase", "Material-UI", "Node.js"],
            "github_url": "https://github.com/yourusername/taskmanager",
            "live_url": "https://taskmanager-demo.vercel.app",
            "type": "Practice",
            "featured": True,
            "status": "Maintained",
            "start_date": "2023-05-01",
        },
        {
            "title": "Weather Dashboard",
            "slug": "weather-dashboard",
            "summary": "Interactive weather forecasting application",
            "description": (
                "A beautiful weather app that displays current conditions and 7-day forecasts."
            ),
            "image_url": "https://placehold.co/600x400/png?text=Weather+App",
            "tech_stack": ["React", "TypeScript", "OpenWeather API", "Chart.js"],
            "github_url": "https://github.com/yourusername/weather",
            "live_url": "https://weather-demo.vercel.app",
            "type": "Personal",
            "status": "Completed",
        },
    ],
    Category.ACHIEVEMENTS: [
        {
            "title": "Hackathon Winner",
            "organization": "Tech Hackathon 2023",
            "date": "2023-03-15",
            "description": "1st place for building an AI-powered study assistant",
            "category": "Competition",
        },
        {
            "title": "Dean's List",
            "organization": "University Name",
            "date": "2022-12-01",
            "description": "Recognized for academic excellence (4 consecutive semesters)",
            "category": "Recognition",
        },
        {
            "title": "Open Source Contributor",
            "organization": "Various Projects",
            "date": "2023-01-01",
            "description": "Active contributor to popular open source projects on GitHub",
            "category": "Recognition",
        },
    ],
    Category.CERTIFICATES: [
        {
            "title": "AWS Certified Developer - Associate",
            "issuer": "Amazon Web Services",
            "issued_date": "2023-06-15",
            "file_url": "#",
            "credential_id": "ABC123XYZ",
            "credential_url": "https://aws.amazon.com/verification",
            "skills": ["AWS", "Cloud Computing", "Lambda", "DynamoDB"],
        },
        {
            "title": "Meta Front-End Developer Professional Certificate",
            "issuer": "Meta (via Coursera)",
            "issued_date": "2022-12-20",
            "file_url": "#",
            "skills": ["React", "JavaScript", "HTML/CSS", "UI/UX"],
        },
    ],
    Category.GALLERY: [
        {
            "title": "Tech Conference 2023",
            "description": "Speaking at the annual developer conference",
            "image_url": "https://placehold.co/600x400/png?text=Conference",
            "category": "Events",
            "date": "2023-09-15",
        },
        {
            "title": "Team Hackathon",
            "description": "Winning team at the company hackathon",
            "image_url": "https://placehold.co/600x400/png?text=Hackathon",
            "category": "Work",
        },
        {
            "title": "Office Workspace",
            "description": "My productive coding setup",
            "image_url": "https://placehold.co/600x400/png?text=Workspace",
            "category": "Personal",
        },
    ],
    Category.HOBBIES: [
        {
            "title": "Photography",
            "description": "Capturing moments and landscapes through my lens.",
            "icon": "📷",
        },
        {
            "title": "Open Source",
            "description": "Contributing to open source projects and building tools for the developer community.",
            "icon": "💻",
        },
        {
            "title": "Gaming",
            "description": "Enjoy strategy games and exploring virtual worlds.",
            "icon": "🎮",
        },
        {
            "title": "Reading",
            "description": "Love reading tech blogs, sci-fi novels, and books on personal development.",
            "icon": "📚",
        },
    ],
    Category.FUTURE_GOALS: [
        {
            "title": "Master Cloud Architecture",
            "description": "Gain deep expertise in cloud platforms and become a certified solutions architect.",
            "target_date": "2025-12-31",
            "category": "Technical",
            "status": "in_progress",
        },
        {
            "title": "Launch a SaaS Product",
            "description": "Build and launch a software-as-a-service product that solves real problems.",
            "target_date": "2026-06-30",
            "category": "Career",
            "status": "planned",
        },
        {
            "title": "Contribute to Major Open Source Projects",
            "description": "Become a core contributor to major open source projects.",
            "target_date": "2027-01-01",
            "category": "Personal",
            "status": "in_progress",
        },
        {
            "title": "Mentor Aspiring Developers",
            "description": "Help newcomers learn programming through mentorship programs.",
            "target_date": "2025-06-01",
            "category": "Personal",
            "status": "in_progress",
        },
    ],
    Category.TESTIMONIALS: [
        {
            "name": "John Doe",
            "role": "Senior Developer at Tech Corp",
            "company": "Tech Corp",
            "quote": (
                "One of the most talented developers I've worked with. Their attention to detail and "
                "problem-solving skills are exceptional."
            ),
            "rating": 5,
            "date": "2023-08-15",
        },
        {
            "name": "Jane Smith",
            "role": "Product Manager",
            "company": "Startup Inc.",
            "quote": "A pleasure to work with! Always delivers high-quality work on time.",
            "rating": 5,
            "date": "2023-07-20",
        },
        {
            "name": "Mike Johnson",
            "role": "Tech Lead",
            "company": "Digital Agency",
            "quote": "Excellent communication skills and technical expertise.",
            "rating": 5,
            "date": "2023-06-10",
        },
    ],
    Category.BLOG_POSTS: [
        {
            "title": "Building Scalable React Applications",
            "slug": "building-scalable-react-applications",
            "excerpt": (
                "Learn best practices for structuring large React applications that scale with your "
                "team and business needs."
            ),
            "content": "Full blog post content here... (This would be markdown or HTML in production)",
            "cover_image_url": "https://placehold.co/800x400/png?text=React+Scalable",
            "author": "Your Name",
            "published_date": "2023-09-01",
            "tags": ["React", "JavaScript", "Architecture", "Best Practices"],
            "read_time": 8,
            "published": True,
            "views": 1250,
        },
        {
            "title": "TypeScript Tips for Beginners",
            "slug": "typescript-tips-for-beginners",
            "excerpt": "Getting started with TypeScript? Here are essential tips to make your journey smoother.",
            "content": "Full blog post content here...",
            "cover_image_url": "https://placehold.co/800x400/png?text=TypeScript+Tips",
            "author": "Your Name",
            "published_date": "2023-08-15",
            "tags": ["TypeScript", "JavaScript", "Tutorial"],
            "read_time": 5,
            "published": True,
            "views": 890,
        },
    ],
}


def sample_items(category: Category) -> List[Record]:
    """分类的示例记录（已校验，带 id 和从 0 开始的 order）"""
    records = []
    for i, raw in enumerate(SAMPLE_ITEMS[category]):
        record = ContentStore.validate_record(category, raw)
        record["id"] = i + 1
        record["order"] = i
        records.append(record)
    return records


def sample_singleton(category: Category) -> Record:
    raw = SAMPLE_PERSONAL_INFO if category is Category.PERSONAL_INFO else SAMPLE_CONTACT_INFO
    record = ContentStore.validate_record(category, copy.deepcopy(raw))
    record["id"] = 1
    return record


def seed_store(store: ContentStore) -> Dict[str, int]:
    """向空库写入示例内容，已有数据的分类跳过

    Returns:
        每个分类写入的条数
    """
    written = {}
    for category in LIST_CATEGORIES:
        if store.fetch_items(category):
            written[category.value] = 0
            continue
        for raw in SAMPLE_ITEMS[category]:
            store.create_item(category, copy.deepcopy(raw))
        written[category.value] = len(SAMPLE_ITEMS[category])

    for category in (Category.PERSONAL_INFO, Category.CONTACT_INFO):
        if store.get_singleton(category) is None:
            raw = SAMPLE_PERSONAL_INFO if category is Category.PERSONAL_INFO else SAMPLE_CONTACT_INFO
            store.upsert_singleton(category, copy.deepcopy(raw))
            written[category.value] = 1
        else:
            written[category.value] = 0
    return written
