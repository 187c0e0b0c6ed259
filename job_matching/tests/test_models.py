"""
Tests for the candidate and job data model.
"""

import unittest
from datetime import date, datetime

from pydantic import ValidationError

from job_matching.models import (
    CandidateProfile,
    EducationEntry,
    EducationLevel,
    JobRequirement,
    MatchResult,
    WorkExperienceEntry,
)


class TestEducationLevel(unittest.TestCase):

    def test_ordinals(self):
        self.assertEqual(
            [level.ordinal for level in EducationLevel], [1, 2, 3, 4, 5]
        )

    def test_ordinal_of_free_text(self):
        self.assertEqual(EducationLevel.ordinal_of("high  school"), 1)
        self.assertEqual(EducationLevel.ordinal_of(EducationLevel.MASTER), 4)
        self.assertEqual(EducationLevel.ordinal_of("Bachelor of Arts"), 0)
        self.assertEqual(EducationLevel.ordinal_of(None), 0)


class TestJobRequirement(unittest.TestCase):

    def test_camel_case_document(self):
        job = JobRequirement.model_validate({
            "_id": "ignored",
            "id": "j1",
            "educationLevel": "bachelor",
            "experienceYearsMin": 2,
            "experienceYearsMax": 4,
            "skills": ["Excel"],
            "eligibility": None,
        })
        self.assertEqual(job.education_level, EducationLevel.BACHELOR)
        self.assertEqual(job.experience_years_min, 2)
        self.assertEqual(job.eligibility, [])

    def test_snake_case_names(self):
        job = JobRequirement(education_level="Doctorate", experience_years_min=1)
        self.assertEqual(job.education_level, EducationLevel.DOCTORATE)

    def test_unknown_education_level_rejected(self):
        with self.assertRaises(ValidationError):
            JobRequirement(education_level="PhD")

    def test_blank_education_level_is_absent(self):
        self.assertIsNone(JobRequirement(education_level="  ").education_level)

    def test_negative_years_rejected(self):
        with self.assertRaises(ValidationError):
            JobRequirement(experience_years_max=-2)

    def test_is_open(self):
        now = datetime(2024, 6, 1)
        self.assertTrue(JobRequirement().is_open(now))
        self.assertTrue(JobRequirement(status="Active", expiry_date=date(2024, 7, 1)).is_open(now))
        self.assertFalse(JobRequirement(status="closed").is_open(now))
        self.assertFalse(JobRequirement(status="active", expiry_date="2024-05-31").is_open(now))


class TestCandidateProfile(unittest.TestCase):

    def test_pds_document(self):
        profile = CandidateProfile.model_validate({
            "personalInfo": {"firstName": "Juan"},
            "education": [{"level": "College", "degree": "Bachelor", "from": 2008, "to": 2012}],
            "workExperience": [
                {"position": "Clerk", "from": "2013-01-15", "to": "2016-01-15", "salary": 20000},
                {"position": "Officer", "startDate": "2016-02-01", "isCurrentPosition": True},
            ],
            "skills": None,
        })
        self.assertEqual(profile.education[0].from_, "2008")
        self.assertEqual(profile.work_experience[0].end_date.year, 2016)
        self.assertTrue(profile.work_experience[1].is_current_position)
        self.assertEqual(profile.skills, [])

    def test_numeric_years_keep_their_value(self):
        """Whole-number floats drop the ".0"; other numbers are not truncated."""
        entry = EducationEntry.model_validate({"from": 2014.0, "to": 2018, "yearGraduated": 2014.5})
        self.assertEqual(entry.from_, "2014")
        self.assertEqual(entry.to, "2018")
        self.assertEqual(entry.year_graduated, "2014.5")

    def test_eligibility_from_civil_service(self):
        profile = CandidateProfile.model_validate({
            "civilService": [
                {"examTitle": "Career Service Professional", "rating": "85.5"},
                {"rating": "80"},
            ]
        })
        self.assertEqual(profile.eligibility, ["Career Service Professional"])

    def test_explicit_eligibility_wins(self):
        profile = CandidateProfile.model_validate({
            "eligibility": ["RA 1080"],
            "civilService": [{"examTitle": "Career Service Professional"}],
        })
        self.assertEqual(profile.eligibility, ["RA 1080"])

    def test_effective_end(self):
        now = datetime(2024, 1, 1)
        current = WorkExperienceEntry(start_date=date(2020, 1, 1), is_current_position=True)
        closed = WorkExperienceEntry(start_date=date(2020, 1, 1), end_date=date(2021, 1, 1))
        open_ended = WorkExperienceEntry(start_date=date(2020, 1, 1))
        self.assertEqual(current.effective_end(now), now)
        self.assertEqual(closed.effective_end(now), datetime(2021, 1, 1))
        self.assertIsNone(open_ended.effective_end(now))

    def test_dump_uses_camel_case(self):
        entry = EducationEntry(degree="Master", school_name="UST", from_="2015")
        dumped = entry.model_dump(by_alias=True)
        self.assertEqual(dumped["schoolName"], "UST")
        self.assertEqual(dumped["from"], "2015")


class TestMatchResult(unittest.TestCase):

    def test_frozen(self):
        result = MatchResult(
            total_score=0.5, education_score=1.0, experience_score=0.3,
            skills_score=0.5, eligibility_score=0.0
        )
        with self.assertRaises(ValidationError):
            result.total_score = 0.9

    def test_range_enforced(self):
        with self.assertRaises(ValidationError):
            MatchResult(
                total_score=1.2, education_score=1.0, experience_score=1.0,
                skills_score=1.0, eligibility_score=1.0
            )

    def test_serializes_camel_case(self):
        result = MatchResult(
            total_score=0.5, education_score=1.0, experience_score=0.3,
            skills_score=0.5, eligibility_score=0.0
        )
        self.assertEqual(
            set(result.model_dump(by_alias=True)),
            {"totalScore", "educationScore", "experienceScore", "skillsScore", "eligibilityScore"}
        )


if __name__ == "__main__":
    unittest.main()
