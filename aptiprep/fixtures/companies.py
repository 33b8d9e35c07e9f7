"""Sample hiring companies with their aptitude test patterns."""

from typing import List

from aptiprep.schemas.company import AptitudeInfo, Company, TestPattern, TestSection


def build_companies() -> List[Company]:
    return [
        Company(
            name="Tata Consultancy Services",
            short_name="TCS",
            logo="https://example.com/logos/tcs.png",
            description="Leading IT services, consulting and business solutions company",
            industry="Information Technology",
            headquarters="Mumbai, India",
            website="https://tcs.com",
            aptitude_info=AptitudeInfo(
                test_pattern=TestPattern(
                    sections=[
                        TestSection(
                            name="Quantitative Aptitude",
                            questions=30,
                            time_limit=40,
                            topics=["arithmetic", "algebra", "geometry", "data-interpretation"],
                        ),
                        TestSection(
                            name="Logical Reasoning",
                            questions=25,
                            time_limit=35,
                            topics=["verbal-reasoning", "analytical-reasoning", "pattern-recognition"],
                        ),
                        TestSection(
                            name="Verbal Ability",
                            questions=20,
                            time_limit=25,
                            topics=["reading-comprehension", "grammar", "vocabulary"],
                        ),
                    ],
                    total_questions=75,
                    total_time=100,
                    cutoff_percentage=65,
                ),
                difficulty="medium",
                syllabus=[
                    "percentages", "profit-loss", "time-work", "time-distance",
                    "simple-interest", "compound-interest", "ratio-proportion",
                    "number-system", "algebra", "geometry", "data-interpretation",
                ],
                tips="Focus on accuracy over speed. Practice time management extensively.",
            ),
        ),
        Company(
            name="Infosys Limited",
            short_name="Infosys",
            logo="https://example.com/logos/infosys.png",
            description="Global leader in next-generation digital services and consulting",
            industry="Information Technology",
            headquarters="Bangalore, India",
            website="https://infosys.com",
            aptitude_info=AptitudeInfo(
                test_pattern=TestPattern(
                    sections=[
                        TestSection(
                            name="Quantitative Aptitude",
                            questions=35,
                            time_limit=45,
                            topics=["arithmetic", "algebra", "geometry"],
                        ),
                        TestSection(
                            name="Logical Reasoning",
                            questions=30,
                            time_limit=40,
                            topics=["logical-reasoning", "analytical-reasoning"],
                        ),
                        TestSection(
                            name="Verbal Ability",
                            questions=25,
                            time_limit=35,
                            topics=["reading-comprehension", "grammar"],
                        ),
                    ],
                    total_questions=90,
                    total_time=120,
                    cutoff_percentage=70,
                ),
                difficulty="medium-hard",
                syllabus=[
                    "advanced-arithmetic", "algebra", "geometry", "probability",
                    "logical-reasoning", "data-sufficiency", "reading-comprehension",
                ],
                tips="Strong focus on logical reasoning and verbal ability. Practice mock tests regularly.",
            ),
        ),
        Company(
            name="Wipro Limited",
            short_name="Wipro",
            logo="https://example.com/logos/wipro.png",
            description="Leading technology services and consulting company",
            industry="Information Technology",
            headquarters="Bangalore, India",
            website="https://wipro.com",
            aptitude_info=AptitudeInfo(
                test_pattern=TestPattern(
                    sections=[
                        TestSection(
                            name="Quantitative Aptitude",
                            questions=25,
                            time_limit=30,
                            topics=["arithmetic", "algebra"],
                        ),
                        TestSection(
                            name="Logical Reasoning",
                            questions=25,
                            time_limit=30,
                            topics=["logical-reasoning", "analytical-reasoning"],
                        ),
                        TestSection(
                            name="Verbal Ability",
                            questions=20,
                            time_limit=20,
                            topics=["reading-comprehension", "grammar"],
                        ),
                    ],
                    total_questions=70,
                    total_time=80,
                    cutoff_percentage=60,
                ),
                difficulty="medium",
                syllabus=[
                    "basic-arithmetic", "percentages", "profit-loss", "time-work",
                    "logical-reasoning", "verbal-ability", "reading-comprehension",
                ],
                tips="Balanced preparation across all sections. Focus on fundamentals.",
            ),
        ),
    ]
