from django.db import migrations, models
import django.db.models.deletion


QUALIFICATION_CHOICES = [
    ('matric', 'Matric'),
    ('intermediate', 'Intermediate'),
    ('bachelors', 'Bachelors'),
    ('masters', 'Masters'),
    ('phd', 'PhD'),
    ('diploma', 'Diploma'),
    ('certificate', 'Certificate'),
    ('other', 'Other'),
]

STATUS_CHOICES = [
    ('active', 'Active'),
    ('suspended', 'Suspended'),
    ('terminated', 'Terminated'),
    ('resigned', 'Resigned'),
    ('retired', 'Retired'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Department',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('code', models.CharField(blank=True, max_length=20, null=True, unique=True)),
                ('description', models.TextField(blank=True)),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Designation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=100)),
                ('level', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('department', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='designations', to='employees.department')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.AddConstraint(
            model_name='designation',
            constraint=models.UniqueConstraint(fields=('department', 'name'), name='uq_designation_department_name'),
        ),
        migrations.CreateModel(
            name='Employee',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('cnic', models.CharField(db_index=True, max_length=13)),
                ('full_name', models.CharField(max_length=255)),
                ('mother_name', models.CharField(blank=True, max_length=255, null=True)),
                ('cnic_issue_date', models.DateField(blank=True, null=True)),
                ('cnic_expiry_date', models.DateField(blank=True, null=True)),
                ('father_husband_name', models.CharField(blank=True, max_length=255, null=True)),
                ('relationship_type', models.CharField(blank=True, choices=[('father', 'Father'), ('husband', 'Husband')], max_length=10, null=True)),
                ('date_of_birth', models.DateField(blank=True, null=True)),
                ('gender', models.CharField(blank=True, choices=[('male', 'Male'), ('female', 'Female'), ('other', 'Other')], max_length=10, null=True)),
                ('marital_status', models.CharField(blank=True, choices=[('single', 'Single'), ('married', 'Married'), ('divorced', 'Divorced'), ('widowed', 'Widowed')], max_length=10, null=True)),
                ('nationality', models.CharField(blank=True, max_length=50, null=True)),
                ('religion', models.CharField(blank=True, choices=[('muslim', 'Muslim'), ('non_muslim', 'Non-Muslim'), ('maseehi', 'Maseehi')], max_length=20, null=True)),
                ('blood_group', models.CharField(blank=True, choices=[('A+', 'A+'), ('A-', 'A-'), ('B+', 'B+'), ('B-', 'B-'), ('AB+', 'AB+'), ('AB-', 'AB-'), ('O+', 'O+'), ('O-', 'O-')], max_length=3, null=True)),
                ('domicile_district', models.CharField(blank=True, choices=[('lahore', 'Lahore'), ('karachi', 'Karachi'), ('islamabad', 'Islamabad'), ('faisalabad', 'Faisalabad'), ('multan', 'Multan'), ('peshawar', 'Peshawar'), ('quetta', 'Quetta'), ('gujranwala', 'Gujranwala'), ('hyderabad', 'Hyderabad'), ('bahawalpur', 'Bahawalpur')], max_length=30, null=True)),
                ('latest_qualification', models.CharField(blank=True, choices=QUALIFICATION_CHOICES, max_length=20, null=True)),
                ('mobile_number', models.CharField(blank=True, max_length=20, null=True)),
                ('whatsapp_number', models.CharField(blank=True, max_length=20, null=True)),
                ('email', models.EmailField(blank=True, max_length=254, null=True)),
                ('present_address', models.TextField(blank=True, null=True)),
                ('permanent_address', models.TextField(blank=True, null=True)),
                ('same_address', models.BooleanField(default=False)),
                ('district', models.CharField(blank=True, max_length=100, null=True)),
                ('city', models.CharField(blank=True, max_length=100, null=True)),
                ('joining_date_mwo', models.DateField(blank=True, null=True)),
                ('joining_date_pmbmc', models.DateField(blank=True, null=True)),
                ('joining_date_psba', models.DateField(blank=True, null=True)),
                ('termination_or_suspend_date', models.DateField(blank=True, null=True)),
                ('termination_reason', models.TextField(blank=True, null=True)),
                ('grade_scale', models.CharField(blank=True, max_length=20, null=True)),
                ('special_duty_note', models.TextField(blank=True, null=True)),
                ('document_missing_note', models.TextField(blank=True, null=True)),
                ('has_disability', models.BooleanField(default=False)),
                ('disability_type', models.CharField(blank=True, choices=[('hearing_impairment', 'Hearing Impairment'), ('visual_impairment', 'Visual Impairment'), ('physical_disability', 'Physical Disability'), ('learning_disability', 'Learning Disability'), ('speech_impairment', 'Speech Impairment'), ('other', 'Other')], max_length=30, null=True)),
                ('disability_description', models.TextField(blank=True, null=True)),
                ('medical_fitness_status', models.BooleanField(blank=True, null=True)),
                ('medical_fitness_file', models.CharField(blank=True, max_length=500, null=True)),
                ('filer_status', models.CharField(blank=True, choices=[('filer', 'Filer'), ('non_filer', 'Non-Filer')], max_length=10, null=True)),
                ('filer_active_status', models.CharField(blank=True, choices=[('active', 'Active'), ('inactive', 'Inactive')], max_length=10, null=True)),
                ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='active', max_length=20)),
                ('profile_picture_file', models.CharField(blank=True, max_length=500, null=True)),
                ('cnic_front_file', models.CharField(blank=True, max_length=500, null=True)),
                ('cnic_back_file', models.CharField(blank=True, max_length=500, null=True)),
                ('domicile_certificate_file', models.CharField(blank=True, max_length=500, null=True)),
                ('educational_certificates_files', models.JSONField(blank=True, null=True)),
                ('other_documents_files', models.JSONField(blank=True, null=True)),
                ('password', models.CharField(blank=True, max_length=128, null=True)),
                ('department', models.ForeignKey(db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name='employees', to='employees.department')),
                ('designation', models.ForeignKey(db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name='employees', to='employees.designation')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.AddConstraint(
            model_name='employee',
            constraint=models.UniqueConstraint(condition=models.Q(('status__in', ['active', 'suspended'])), fields=('cnic',), name='uq_employee_live_cnic'),
        ),
        migrations.AddIndex(
            model_name='employee',
            index=models.Index(fields=['department', 'status'], name='emp_dept_status_idx'),
        ),
        migrations.AddIndex(
            model_name='employee',
            index=models.Index(fields=['designation'], name='emp_desig_idx'),
        ),
        migrations.CreateModel(
            name='Document',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('file_path', models.CharField(max_length=500)),
                ('file_type', models.CharField(blank=True, max_length=50, null=True)),
                ('document_name', models.CharField(blank=True, max_length=255, null=True)),
                ('file_size', models.PositiveBigIntegerField(blank=True, null=True)),
                ('mime_type', models.CharField(blank=True, max_length=100, null=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documents', to='employees.employee')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='EducationQualification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('education_level', models.CharField(choices=QUALIFICATION_CHOICES, max_length=20)),
                ('institution_name', models.CharField(blank=True, max_length=255, null=True)),
                ('year_of_completion', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('marks_gpa', models.CharField(blank=True, max_length=20, null=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='education_qualifications', to='employees.employee')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='EmploymentRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organization', models.CharField(choices=[('MBWO', 'Model Bazaar Welfare Organization'), ('PMBMC', 'Punjab Model Bazaars Management Company'), ('PSBA', 'Punjab Sahulat Bazaars Authority')], max_length=10)),
                ('employment_type', models.CharField(choices=[('Regular', 'Permanent employment'), ('Contract', 'Fixed-term contract'), ('Probation', 'Probationary period'), ('Internship', 'Internship program')], default='Regular', max_length=20)),
                ('effective_from', models.DateField(blank=True, null=True)),
                ('effective_till', models.DateField(blank=True, null=True)),
                ('role_tag', models.CharField(blank=True, max_length=100, null=True)),
                ('office_location', models.CharField(blank=True, max_length=255, null=True)),
                ('scale_grade', models.CharField(blank=True, max_length=20, null=True)),
                ('remarks', models.TextField(blank=True, null=True)),
                ('is_on_probation', models.BooleanField(default=False)),
                ('probation_end_date', models.DateField(blank=True, null=True)),
                ('department', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='employment_records', to='employees.department')),
                ('designation', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='employment_records', to='employees.designation')),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='employment_records', to='employees.employee')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='PastExperience',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company_name', models.CharField(max_length=255)),
                ('position', models.CharField(blank=True, max_length=255, null=True)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='past_experiences', to='employees.employee')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='StatusChange',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('from_status', models.CharField(blank=True, max_length=20, null=True)),
                ('to_status', models.CharField(choices=STATUS_CHOICES, max_length=20)),
                ('reason', models.TextField(blank=True, null=True)),
                ('effective_date', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='status_changes', to='employees.employee')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
    ]
