from __future__ import annotations

RESUME_ANALYSIS_PROMPT = """
You are an experienced resume reviewer and career coach. Review the resume below and give detailed, constructive feedback.

Resume:
{resume_text}

Reply with one JSON object in exactly this shape:
{{
  "overallScore": <integer 0-100>,
  "strengths": [<3-5 strengths>],
  "weaknesses": [<3-5 areas to improve>],
  "suggestions": [<3-5 actionable suggestions>],
  "keySkills": [<key skills found in the resume>],
  "summary": "<2-3 sentence summary>"
}}

Be specific and actionable.
""".strip()

ATS_COMPATIBILITY_PROMPT = """
You are an Applicant Tracking System (ATS) specialist. Compare the resume with the job description and assess how well it would pass an ATS screen.

Resume:
{resume_text}

Job description:
{job_description}

Reply with one JSON object in exactly this shape:
{{
  "atsScore": <integer 0-100>,
  "matchPercentage": <integer 0-100>,
  "matchedKeywords": [<keywords present in both>],
  "missingKeywords": [<important job keywords absent from the resume>],
  "recommendations": [<3-5 specific recommendations>],
  "summary": "<short compatibility summary>"
}}
""".strip()

RESUME_VALIDITY_PROMPT = """
You check whether a document is a resume/CV. Resumes usually contain contact details, work history, education, a skills section and a professional summary.

Document:
{text}

Reply with only one JSON object and no other text:
{{
  "isResume": <true or false>,
  "confidence": <integer 0-100>,
  "reason": "<short explanation>"
}}
""".strip()


def build_resume_analysis_prompt(resume_text: str) -> str:
    return RESUME_ANALYSIS_PROMPT.format(resume_text=resume_text)


def build_ats_compatibility_prompt(resume_text: str, job_description: str) -> str:
    return ATS_COMPATIBILITY_PROMPT.format(resume_text=resume_text, job_description=job_description)


def build_resume_validity_prompt(text: str, max_chars: int = 2000) -> str:
    return RESUME_VALIDITY_PROMPT.format(text=(text or "")[:max_chars])
