"""
Objective grading - deterministic grading of MCQ and true/false answers.

The comparison is a literal, case-sensitive match against the correct
option's text. Whitespace and case are not normalised.
"""

from ..errors import DataIntegrityError
from ..models import GradedAnswer, Question, QuestionOption
from ..utils import round_marks
from .answer_resolver import ResolvedAnswer


class ObjectiveGrader:
    """Grades objective answers against the single correct option."""
    
    @staticmethod
    def correct_option(question: Question) -> QuestionOption:
        """
        Return the question's only correct option.
        
        Raises:
            DataIntegrityError: If zero or several options are marked correct
        """
        correct = [opt for opt in question.options if opt.is_correct]
        if len(correct) != 1:
            raise DataIntegrityError(
                f"Question {question.question_id} has {len(correct)} correct options, expected exactly 1",
                question_id=question.question_id
            )
        return correct[0]
    
    def grade(self, resolved: ResolvedAnswer) -> GradedAnswer:
        answer, question = resolved
        option = self.correct_option(question)
        
        is_correct = isinstance(answer.user_answer, str) and answer.user_answer == option.text
        
        return GradedAnswer(
            question=question,
            user_answer=answer.user_answer,
            is_correct=is_correct,
            marks_obtained=round_marks(question.marks, question.marks) if is_correct else 0,
            time_spent=answer.time_spent
        )
