from __future__ import annotations

from typing import Any

from resume_match.schemas.feedback import ComprehensiveFeedback

_HUMAN_RESOURCES: dict[str, Any] = {
    "strength_areas": [
        "Leadership of teams and interns that carries over to HR team management",
        "Regular stakeholder engagement with product managers and cross-functional partners",
        "Process improvement experience that applies to HR operations",
        "Track record of juggling priorities and delivering on schedule",
    ],
    "improvement_areas": [
        "Gain direct exposure to compensation, benefits, onboarding and performance reviews",
        "List HR coursework or certifications to show commitment to the move into HR",
        "Open with a summary that frames transferable skills for an HR audience",
        "Add HR competencies such as employee relations to the skills section",
    ],
    "experience_gaps": [
        "No direct compensation and benefits administration",
        "Little evidence of employee onboarding work",
        "No examples of running performance review cycles",
    ],
    "relevant_experiences": [
        "Led two sub-teams and supervised interns",
        "Worked closely with product managers and stakeholders",
        "Ran code reviews and architecture discussions with a process focus",
    ],
    "ats_tips": [
        "Add 'Human Resources' and related terms to the skills section",
        "Give HR coursework or certifications their own section",
        "Use clear headings and bullet points",
        "Use HR action verbs such as 'administered', 'onboarded' and 'coached'",
        "Submit a plain, single-column layout",
    ],
    "suggested_bullets": [
        "Led cross-functional teams and mentored interns, raising team productivity",
        "Gathered requirements from stakeholders and aligned project goals across departments",
        "Introduced process changes that cut delivery times and improved consistency",
        "Managed several concurrent projects without slipping quality targets",
        "Documented requirements and procedures in detail for handover and audit",
    ],
    "match_overview": {
        "top_strengths": [
            "Team leadership and people management",
            "Stakeholder communication",
            "Delivering under competing priorities",
        ],
        "top_improvements": [
            "Direct HR experience in compensation and benefits",
            "HR certifications or coursework",
            "More prominent transferable skills",
        ],
        "priority_actions": [
            "Start an HR certification such as SHRM-CP or PHR",
            "Add HR terminology to the skills section",
            "Rewrite experience bullets around people and process outcomes",
        ],
    },
    "required_skills": {
        "skill_gaps": [
            "Missing: HRIS systems (critical)",
            "Missing: Compensation and benefits administration (critical)",
            "Limited: Employee relations (important)",
        ],
        "missing_critical_skills": [
            "HRIS systems",
            "Compensation and benefits administration",
            "Performance management",
        ],
    },
    "work_experience": {
        "duration_analysis": (
            "Several years of software delivery with solid leadership, but no time spent in a dedicated HR role."
        ),
        "relevant_experiences": [
            "Managing interns and junior staff",
            "Stakeholder engagement",
            "Process improvement",
        ],
        "experience_gaps": [
            "No direct HR function experience",
            "Limited onboarding exposure",
            "No performance management ownership",
        ],
    },
    "education_credentials": {
        "education_match": "A technical degree shows analytical strength but no formal HR education is listed.",
        "missing_credentials": [
            "HR certification (SHRM, PHR or equivalent)",
            "HR-related coursework",
        ],
    },
    "impact_achievements": {
        "current_achievements": [
            "Led teams and supervised interns",
            "Delivered process improvements",
            "Shipped projects on schedule",
        ],
        "missing_metrics": [
            "Size of the teams managed",
            "Measured effect of process changes",
            "On-time delivery rate",
        ],
    },
    "ats_compatibility": {
        "ats_issues": [
            "HR keywords missing from the skills section",
            "Job titles do not signal HR experience",
        ],
        "missing_keywords": ["Human Resources", "HRIS", "Employee Relations", "Performance Management"],
        "formatting_problems": [
            "No dedicated HR skills section",
            "Date formats vary between roles",
        ],
    },
    "professional_quality": {
        "writing_issues": [
            "Some bullets run long",
            "Few strong action verbs",
        ],
        "consistency_problems": ["Mixed date formats between roles"],
        "formatting_concerns": ["No professional summary at the top"],
    },
}

_SOFTWARE_ENGINEERING: dict[str, Any] = {
    "strength_areas": [
        "Hands-on experience with modern web development",
        "Leads teams and mentors junior developers",
        "Problem solving backed by measurable results",
        "Good balance of technical depth and collaboration",
    ],
    "improvement_areas": [
        "Quantify more achievements with performance numbers and team sizes",
        "Name the tools and frameworks the posting asks for",
        "Expand leadership examples to match senior expectations",
    ],
    "experience_gaps": [
        "No explicit cloud platform experience (AWS, Azure or GCP)",
        "Little evidence of CI/CD pipelines or DevOps practice",
        "Few examples of cross-functional collaboration",
    ],
    "relevant_experiences": [
        "Led a TypeScript migration",
        "Built production React applications",
        "Mentored developers through reviews and pairing",
        "Delivered projects on schedule",
    ],
    "ats_tips": [
        "Add a 'Technical Skills' section listing React, TypeScript and Node.js explicitly",
        "Use the exact job title from the posting where it is accurate",
        "Keep standard headers: 'Experience', 'Education', 'Skills'",
        "Spell out acronyms on first use, e.g. 'continuous integration (CI/CD)'",
        "State total years of experience near the top",
        "Prefer bullet points over paragraphs",
    ],
    "suggested_bullets": [
        "Led five developers migrating a legacy app to React and TypeScript, cutting load time by 40%",
        "Designed Node.js microservices on Docker, reducing deployment time by 60%",
        "Mentored three junior developers through code review and pairing, two promoted within a year",
        "Partnered with product managers to ship 15+ features at a 98% on-time rate",
        "Introduced a Jest testing strategy reaching 85% coverage and halving production bugs",
    ],
    "match_overview": {
        "top_strengths": [
            "Modern web development foundation",
            "Team leadership and mentorship",
            "Measurable problem solving",
        ],
        "top_improvements": [
            "More metrics on achievements",
            "Cloud and DevOps experience",
            "Cross-functional collaboration examples",
        ],
        "priority_actions": [
            "Add cloud platform experience to the skills section",
            "Attach a metric to every achievement bullet",
            "Surface CI/CD and DevOps work",
        ],
    },
    "required_skills": {
        "skill_gaps": [
            "Missing: Cloud platforms (critical)",
            "Limited: CI/CD and DevOps (important)",
            "Missing: Container orchestration (nice-to-have)",
        ],
        "missing_critical_skills": ["AWS/Azure/GCP", "CI/CD pipelines", "Infrastructure as Code"],
    },
    "work_experience": {
        "duration_analysis": (
            "Solid web development tenure with leadership roles; cloud and DevOps exposure is the main gap."
        ),
        "relevant_experiences": [
            "TypeScript migration",
            "React application development",
            "Team leadership and mentorship",
        ],
        "experience_gaps": [
            "No cloud platform work",
            "Limited CI/CD ownership",
            "Few cross-functional projects",
        ],
    },
    "education_credentials": {
        "education_match": "A technical degree aligns with the role and provides a strong foundation.",
        "missing_credentials": ["A cloud certification (AWS, Azure or GCP) would strengthen the profile"],
    },
    "impact_achievements": {
        "current_achievements": [
            "Led a team of five developers",
            "Reduced deployment time by 60%",
            "Reached 85% code coverage",
        ],
        "missing_metrics": [
            "Performance improvement percentages",
            "Team sizes for leadership roles",
            "Business impact of projects",
        ],
    },
    "ats_compatibility": {
        "ats_issues": [
            "Technical skills are spread across bullets instead of listed",
            "Several posting keywords are absent",
        ],
        "missing_keywords": ["AWS", "CI/CD", "Microservices", "Docker", "Kubernetes"],
        "formatting_problems": ["No dedicated technical skills section"],
    },
    "professional_quality": {
        "writing_issues": [
            "Some bullets lack metrics",
            "Action verbs could be stronger",
        ],
        "consistency_problems": [],
        "formatting_concerns": ["No professional summary"],
    },
}

_DEFAULT: dict[str, Any] = {
    "strength_areas": [
        "Analytical and problem-solving skills shown through project work",
        "Clear communication and collaboration",
        "Consistent delivery against deadlines",
        "Adapts quickly across varied responsibilities",
    ],
    "improvement_areas": [
        "Quantify achievements with concrete numbers",
        "Lead with experience relevant to the target role",
        "Spell out transferable skills that map to the requirements",
    ],
    "experience_gaps": [
        "Limited direct experience in the target domain",
        "Some skills named in the posting do not appear in the resume",
    ],
    "relevant_experiences": [
        "Team leadership and coordination",
        "Stakeholder communication",
        "Projects delivered on time and in scope",
    ],
    "ats_tips": [
        "Mirror relevant keywords from the posting in the skills section",
        "Use clear headings and bullet points",
        "Include quantifiable achievements",
        "Use a standard single-column layout",
        "Keep section headers conventional: Experience, Education, Skills",
    ],
    "suggested_bullets": [
        "Coordinated a cross-functional project team and delivered two weeks ahead of schedule",
        "Streamlined a recurring process, saving roughly five hours per week",
        "Presented findings to senior stakeholders, securing approval for the next phase",
        "Trained new team members, shortening their ramp-up time",
        "Tracked project metrics and reported progress to leadership each week",
    ],
    "match_overview": {
        "top_strengths": [
            "Problem solving",
            "Communication and collaboration",
            "Reliable delivery",
        ],
        "top_improvements": [
            "Quantified achievements",
            "Role-specific experience",
            "Posting keywords",
        ],
        "priority_actions": [
            "Add metrics to the top five bullets",
            "Reorder experience so the most relevant role comes first",
            "Add missing posting keywords to the skills section",
        ],
    },
    "required_skills": {
        "skill_gaps": ["Some required skills are not evidenced in the resume"],
        "missing_critical_skills": [],
    },
    "work_experience": {
        "duration_analysis": "Experience shows transferable strengths; direct domain tenure is limited.",
        "relevant_experiences": [
            "Team coordination",
            "Stakeholder communication",
        ],
        "experience_gaps": ["Limited direct domain experience"],
    },
    "education_credentials": {
        "education_match": "Education is adequate for the role; no specific credential gaps were identified.",
        "missing_credentials": [],
    },
    "impact_achievements": {
        "current_achievements": ["Delivered projects on schedule"],
        "missing_metrics": [
            "Quantify outcomes of key projects",
            "Add scale such as budgets, users or team sizes",
        ],
    },
    "ats_compatibility": {
        "ats_issues": ["Keyword coverage of the posting is partial"],
        "missing_keywords": [],
        "formatting_problems": [],
    },
    "professional_quality": {
        "writing_issues": ["Some bullets describe duties rather than results"],
        "consistency_problems": [],
        "formatting_concerns": [],
    },
}

_BY_DOMAIN: dict[str, dict[str, Any]] = {
    "Human Resources": _HUMAN_RESOURCES,
    "Software Engineering": _SOFTWARE_ENGINEERING,
}


def mock_comprehensive_feedback(domain: str | None) -> ComprehensiveFeedback:
    """Static feedback for the domain, or the generic table for unknown domains."""
    return ComprehensiveFeedback.model_validate(_BY_DOMAIN.get(domain or "", _DEFAULT))
